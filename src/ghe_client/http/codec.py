"""Request body encoding and typed response decoding.

Bodies go out as JSON. Responses are decoded according to the declared
response type: None means "no value expected", bytes and str bypass JSON, and
anything else is validated through a pydantic TypeAdapter. Adapters are
expensive to build, so one per response type is kept in the memoization cache.
"""

import logging
from typing import Any

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticSerializationError, to_json

from ..exceptions import CodecError
from .cache import MemoCache
from .envelope import Envelope

logger = logging.getLogger("ghe_client.codec")

__all__ = ["JSON_CONTENT_TYPE", "ResponseCodec", "is_json_content_type"]

JSON_CONTENT_TYPE = "application/json"


def is_json_content_type(content_type: str | None) -> bool:
    """True for application/json and vendor types such as application/vnd.github+json.

    A missing Content-Type is treated as JSON, which is what the API sends.
    """
    if content_type is None:
        return True
    return content_type == JSON_CONTENT_TYPE or content_type.endswith("+json")


class ResponseCodec:
    """Serializes request payloads and deserializes typed responses.

    Args:
        cache: Memoization cache shared with the owning connection
    """

    def __init__(self, cache: MemoCache | None = None) -> None:
        self._cache = cache if cache is not None else MemoCache()

    def adapter_for(self, response_type: Any) -> TypeAdapter:
        """Return the (memoized) TypeAdapter for a response type."""
        return self._cache.get_or_compute(
            ("type_adapter", response_type), lambda: TypeAdapter(response_type)
        )

    def serialize(self, body: Any) -> bytes | None:
        """Encode a request body.

        Args:
            body: pydantic model, dict/list of JSON-compatible values (models
                allowed inside), str, bytes, or None

        Returns:
            Encoded bytes, or None when there is no body

        Raises:
            CodecError: If the body cannot be encoded as JSON
        """
        if body is None:
            return None
        if isinstance(body, bytes):
            return body
        if isinstance(body, str):
            return body.encode("utf-8")
        try:
            if isinstance(body, BaseModel):
                return body.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")
            return to_json(body, by_alias=True, exclude_none=True)
        except (PydanticSerializationError, TypeError, ValueError) as e:
            raise CodecError(f"Cannot serialize {type(body).__name__} request body: {e}") from e

    def deserialize(self, envelope: Envelope, response_type: Any = None) -> Any:
        """Decode a successful envelope into the declared response type.

        Args:
            envelope: 2xx exchange
            response_type: None (no value), bytes, str, or any type pydantic
                can validate (models, list[Model], dict[str, Any], ...)

        Returns:
            Decoded value

        Raises:
            CodecError: If the body is missing, not JSON, or does not match
                the declared type
        """
        if response_type is None:
            return None
        if response_type is bytes:
            return envelope.body
        if response_type is str:
            return envelope.text

        if not envelope.body:
            raise CodecError(
                f"Expected {getattr(response_type, '__name__', response_type)} "
                f"but response {envelope.status_code} had an empty body"
            )
        if not is_json_content_type(envelope.content_type):
            raise CodecError(
                f"Cannot decode content type '{envelope.content_type}' as JSON"
            )

        try:
            return self.adapter_for(response_type).validate_json(envelope.body)
        except PydanticValidationError as e:
            logger.warning(
                "response_decode_failed",
                extra={
                    "url": envelope.url,
                    "response_type": str(response_type),
                    "error_count": e.error_count(),
                },
            )
            raise CodecError(f"Response did not match {response_type}: {e}") from e
