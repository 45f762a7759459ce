import base64


def encode_image_to_data_uri(image: bytes, mime_type: str) -> str:
    """Inline an image as a data: URI so it can go straight into the prompt payload."""
    payload = base64.b64encode(image).decode("ascii")
    return f"data:{mime_type};base64,{payload}"
