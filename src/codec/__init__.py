"""Binary OTL codec: decoder, encoder and the byte-level text rules."""

from .decoder import DecoderConfig, OutlineDecoder, decode_records
from .encoder import EncoderConfig, OutlineEncoder, encode_forest
from .errors import DecodeError, DecodeErrorKind, EncodeError

__all__ = [
    "DecodeError",
    "DecodeErrorKind",
    "DecoderConfig",
    "EncodeError",
    "EncoderConfig",
    "OutlineDecoder",
    "OutlineEncoder",
    "decode_records",
    "encode_forest",
]
