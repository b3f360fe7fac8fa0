"""Charset conversion between the browser (UTF-8) and the MUCK.

When GBK mode is off both directions are the identity.
"""

import codecs
import logging
from dataclasses import dataclass

from .errors import TranscodeError

logger = logging.getLogger(__name__)

CLIENT_CODEC = "utf-8"
LEGACY_CODEC = "gbk"


@dataclass(frozen=True)
class Transcoder:
    """Stateless byte-to-byte converter shared by both pumps of a session."""

    enabled: bool = False
    legacy_codec: str = LEGACY_CODEC

    def to_backend_encoding(self, data: bytes) -> bytes:
        """Convert UTF-8 bytes from the client into the backend charset.

        Raises:
            TranscodeError: If ``data`` is not valid UTF-8 or holds characters
                the backend charset cannot represent.
        """
        if not self.enabled:
            return data
        try:
            return data.decode(CLIENT_CODEC).encode(self.legacy_codec)
        except UnicodeError as e:
            raise TranscodeError(self.legacy_codec, str(e)) from e

    def to_client_encoding(self, data: bytes) -> bytes:
        """Convert backend bytes into UTF-8 for the client.

        Raises:
            TranscodeError: If ``data`` is not valid in the backend charset.
        """
        if not self.enabled:
            return data
        try:
            return data.decode(self.legacy_codec).encode(CLIENT_CODEC)
        except UnicodeError as e:
            raise TranscodeError(self.legacy_codec, str(e)) from e

    def client_stream(self) -> "StreamDecoder":
        """Create a decoder for one backend byte stream."""
        return StreamDecoder(self)


class StreamDecoder:
    """Apply ``to_client_encoding`` to a stream read in arbitrary chunks.

    A multibyte character cut in two by a read is held back until the rest
    of it arrives. Bytes that can never form a character still raise.
    """

    def __init__(self, transcoder: Transcoder) -> None:
        self.transcoder = transcoder
        self._decoder = None
        if transcoder.enabled:
            self._decoder = codecs.getincrementaldecoder(transcoder.legacy_codec)(
                errors="strict"
            )

    def feed(self, data: bytes) -> bytes:
        """Convert the next chunk; may return fewer bytes or none at all.

        Raises:
            TranscodeError: If the stream holds malformed bytes.
        """
        if self._decoder is None:
            return data
        try:
            text = self._decoder.decode(data)
        except UnicodeError as e:
            raise TranscodeError(self.transcoder.legacy_codec, str(e)) from e

        pending = self._decoder.getstate()[0]
        if pending:
            logger.debug("Holding %d byte(s) of a split character", len(pending))
        return text.encode(CLIENT_CODEC)
