# src/codec/codec_factory.py - v1
"""Factory: instantiate a document codec from its backend name."""

from __future__ import annotations

from pdffusion.codec.base_codec import BaseDocumentCodec
from pdffusion.codec.pymupdf_codec import PyMuPdfCodec
from pdffusion.codec.pypdf_codec import PyPdfCodec

# Registry maps backend name -> codec class.
_CODEC_REGISTRY: dict[str, type[BaseDocumentCodec]] = {
    "pymupdf": PyMuPdfCodec,
    "pypdf": PyPdfCodec,
}


class UnsupportedCodecError(ValueError):
    """Raised when no codec is registered under a name."""


def create_codec(backend: str) -> BaseDocumentCodec:
    """Create a codec for the given backend name.

    Raises:
        UnsupportedCodecError: If no codec is registered.
    """
    cls = _CODEC_REGISTRY.get(backend.lower())
    if cls is None:
        raise UnsupportedCodecError(
            f"No codec named {backend!r}. "
            f"Supported: {', '.join(sorted(_CODEC_REGISTRY))}"
        )
    return cls()


def register_codec(backend: str, cls: type[BaseDocumentCodec]) -> None:
    """Register a custom codec under a backend name."""
    _CODEC_REGISTRY[backend.lower()] = cls


def supported_codecs() -> list[str]:
    return sorted(_CODEC_REGISTRY)
