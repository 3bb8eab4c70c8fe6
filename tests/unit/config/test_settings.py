# tests/unit/config/test_settings.py - v1
"""Tests for config/settings.py: typed Settings and validation rules."""

from __future__ import annotations

from pathlib import Path

import pytest

from pdffusion.config.settings import ConfigurationError, Settings, load_settings


class TestSettingsDefaults:
    def test_default_codec(self):
        s = Settings(_env_file=None)
        assert s.codec_backend == "pymupdf"

    def test_default_merge_gate(self):
        s = Settings(_env_file=None)
        assert s.min_documents == 2
        assert s.max_concurrent_reads == 4

    def test_default_output_naming(self):
        s = Settings(_env_file=None)
        assert s.output_name_prefix == "merged_document_"
        assert s.output_extension == ".pdf"

    def test_default_logging(self):
        s = Settings(_env_file=None)
        assert s.log_level == "INFO"
        assert s.log_format == "text"
        assert s.log_file is None


class TestSettingsEnvironment:
    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("PDFFUSION_CODEC_BACKEND", "pypdf")
        monkeypatch.setenv("PDFFUSION_MIN_DOCUMENTS", "3")
        s = Settings(_env_file=None)
        assert s.codec_backend == "pypdf"
        assert s.min_documents == 3

    def test_env_file(self, tmp_path):
        env = tmp_path / ".env"
        env.write_text("PDFFUSION_LOG_FILE=logs/merge.log\nPDFFUSION_LOG_FORMAT=json\n")
        s = Settings(_env_file=env)
        assert s.log_file == Path("logs/merge.log")
        assert s.log_format == "json"


class TestSettingsValidation:
    def test_min_documents_below_two(self):
        with pytest.raises(ConfigurationError, match="MIN_DOCUMENTS"):
            Settings(_env_file=None, min_documents=1)

    def test_zero_concurrent_reads(self):
        with pytest.raises(ConfigurationError, match="MAX_CONCURRENT_READS"):
            Settings(_env_file=None, max_concurrent_reads=0)

    def test_empty_media_types(self):
        with pytest.raises(ConfigurationError, match="ACCEPTED_MEDIA_TYPES"):
            Settings(_env_file=None, accepted_media_types=" , ")

    def test_errors_are_joined(self):
        with pytest.raises(ConfigurationError, match="MIN_DOCUMENTS.*MAX_CONCURRENT_READS"):
            Settings(_env_file=None, min_documents=0, max_concurrent_reads=0)

    def test_extension_needs_dot(self):
        with pytest.raises(ValueError, match="output_extension"):
            Settings(_env_file=None, output_extension="pdf")

    def test_log_rotation_format(self):
        with pytest.raises(ValueError, match="Invalid size"):
            Settings(_env_file=None, log_rotation="ten megabytes")

    def test_unknown_codec(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, codec_backend="ghostscript")


class TestSettingsHelpers:
    def test_accepted_media_types_list(self):
        s = Settings(_env_file=None, accepted_media_types="application/pdf, Application/X-PDF")
        assert s.accepted_media_types_list == ["application/pdf", "application/x-pdf"]


class TestLoadSettings:
    def test_with_overrides(self):
        s = load_settings(_env_file=None, log_level="DEBUG", codec_backend="pypdf")
        assert s.log_level == "DEBUG"
        assert s.codec_backend == "pypdf"
