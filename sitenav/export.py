"""Encode a resolved SiteModel as JSON for the external build pipeline."""

from __future__ import annotations

import typing as typ
from types import MappingProxyType

import msgspec.json as msgspec_json

if typ.TYPE_CHECKING:
    from .config.models import SiteModel


def _enc_hook(value: object) -> object:
    if isinstance(value, MappingProxyType):
        return dict(value)
    msg = f"Cannot encode objects of type {type(value).__name__}"
    raise NotImplementedError(msg)


_ENCODER = msgspec_json.Encoder(enc_hook=_enc_hook)


def encode_site_model(model: SiteModel, *, indent: int = 2) -> bytes:
    """Return ``model`` as UTF-8 JSON; sidebar children encode as pairs.

    Examples
    --------
    >>> from sitenav.config import resolve
    >>> encode_site_model(resolve({"base": "/", "title": "T"}), indent=0)[:13]
    b'{"metadata":{'
    """
    payload = _ENCODER.encode(model)
    if indent <= 0:
        return payload
    return msgspec_json.format(payload, indent=indent)


__all__ = ["encode_site_model"]
