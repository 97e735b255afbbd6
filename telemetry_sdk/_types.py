from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any, Mapping, Union

    # Attribute values are scalars; anything else is sent as its type name.
    Attributes = Mapping[str, Any]

    # A pre-serialized JSON object, copied into payloads verbatim.
    RawJSON = Union[bytes, str]
