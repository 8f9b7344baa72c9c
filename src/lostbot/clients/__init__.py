"""Remote service clients."""

from .coc import CocApiError, CocClient, encode_tag, normalize_tag

__all__ = ["CocClient", "CocApiError", "normalize_tag", "encode_tag"]
