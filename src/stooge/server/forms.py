"""Form body decoding for the transport adapter.

``multipart/form-data`` bodies are parsed into a flat field mapping with
``python-multipart``. File parts are skipped: only text fields reach the
Request, which re-serializes them as a URL-encoded body.
"""

from typing import Any

from python_multipart.multipart import MultipartParser, parse_options_header


def is_multipart(content_type: str) -> bool:
    return content_type.split(";", 1)[0].strip().lower() == "multipart/form-data"


def parse_multipart(body: bytes, content_type: str) -> dict[str, str]:
    """Parse multipart form fields (first value per field name).

    Raises ``ValueError`` if the content type carries no boundary.
    """
    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if boundary is None:
        msg = "Multipart form data missing boundary parameter"
        raise ValueError(msg)

    fields: dict[str, str] = {}

    # Current part state
    headers: dict[str, str] = {}
    data = bytearray()
    field_name: str | None = None
    is_file = False

    def on_part_begin() -> None:
        nonlocal data, field_name, is_file
        headers.clear()
        data = bytearray()
        field_name = None
        is_file = False

    def on_part_data(chunk: bytes, start: int, end: int) -> None:
        data.extend(chunk[start:end])

    def on_part_end() -> None:
        if field_name is None or is_file:
            return
        fields.setdefault(field_name, data.decode("utf-8", errors="replace"))

    def on_header_field(hdata: bytes, start: int, end: int) -> None:
        headers["_pending_field"] = hdata[start:end].decode("latin-1").lower()

    def on_header_value(hdata: bytes, start: int, end: int) -> None:
        nonlocal field_name, is_file
        name = headers.pop("_pending_field", "")
        value = hdata[start:end].decode("latin-1")
        headers[name] = value
        if name == "content-disposition":
            _, params = parse_options_header(value.encode("latin-1"))
            raw_name = params.get(b"name")
            if raw_name is not None:
                field_name = raw_name.decode("utf-8")
            is_file = b"filename" in params

    callbacks: dict[str, Any] = {
        "on_part_begin": on_part_begin,
        "on_part_data": on_part_data,
        "on_part_end": on_part_end,
        "on_header_field": on_header_field,
        "on_header_value": on_header_value,
    }

    parser = MultipartParser(boundary, callbacks)
    parser.write(body)
    parser.finalize()
    return fields
