"""Tests for the local-disk adapter."""

from __future__ import annotations

import asyncio

import pytest

from virtfs.adapters.local import resource_from_file, stat_info_from_path, write_resource
from virtfs.models.content import ContentKind
from virtfs.models.stat_info import FileKind


class TestResourceFromFile:
    def test_lazy_factory_resource(self, sample_file):
        resource = resource_from_file(sample_file)
        assert resource.path == "/hello.txt"
        assert resource.name == "hello.txt"
        assert resource.content_kind == ContentKind.STREAM_FACTORY
        assert resource.stat_info.kind == FileKind.FILE
        assert resource.source.fs_path == str(sample_file)

    def test_virtual_path(self, sample_file):
        resource = resource_from_file(sample_file, "/resources/app/hello.txt")
        assert resource.path == "/resources/app/hello.txt"

    def test_content(self, sample_file):
        resource = resource_from_file(sample_file)
        assert asyncio.run(resource.get_string()) == "hello"
        assert resource.source.modified is False

    def test_stream_reads_file(self, sample_file):
        resource = resource_from_file(sample_file)
        assert b"".join(resource.get_stream()) == b"hello"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            resource_from_file(tmp_path / "missing.txt")

    def test_directory_rejected(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            resource_from_file(tmp_path)

    def test_stat_info_from_path(self, sample_file):
        assert stat_info_from_path(sample_file).size == 5


class TestWriteResource:
    def test_write(self, sample_file, tmp_path):
        resource = resource_from_file(sample_file)
        dest = tmp_path / "out" / "copy.txt"
        assert asyncio.run(write_resource(resource, dest)) is True
        assert dest.read_bytes() == b"hello"

    def test_skip_unmodified(self, sample_file, tmp_path):
        resource = resource_from_file(sample_file)
        dest = tmp_path / "copy.txt"
        assert asyncio.run(write_resource(resource, dest, only_modified=True)) is False
        assert not dest.exists()

    def test_write_modified(self, sample_file, tmp_path):
        resource = resource_from_file(sample_file)
        resource.set_string("changed")
        dest = tmp_path / "copy.txt"
        assert asyncio.run(write_resource(resource, dest, only_modified=True)) is True
        assert dest.read_text() == "changed"

    def test_read_then_write_back_skipped(self, sample_file):
        resource = resource_from_file(sample_file)
        asyncio.run(resource.get_buffer())
        assert asyncio.run(write_resource(resource, sample_file, only_modified=True)) is False
