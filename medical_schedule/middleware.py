from starlette.datastructures import Headers
from starlette.exceptions import HTTPException
from starlette.status import HTTP_413_REQUEST_ENTITY_TOO_LARGE
from medical_schedule.utils.responses import error_response

TOO_LARGE_MESSAGE = "Request body too large"


class BodySizeLimitMiddleware:
    """
    Rejects request bodies above max_body_size with 413.

    A declared Content-Length is checked up front; chunked bodies are counted
    while the endpoint reads them and fail with HTTPException(413), which the
    app's exception handlers turn into the JSON envelope.
    """

    def __init__(self, app, max_body_size: int):
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        length = Headers(scope=scope).get("content-length")
        if length and length.isdigit() and int(length) > self.max_body_size:
            response = error_response(HTTP_413_REQUEST_ENTITY_TOO_LARGE, TOO_LARGE_MESSAGE)
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive():
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_size:
                    raise HTTPException(status_code=HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=TOO_LARGE_MESSAGE)
            return message

        await self.app(scope, limited_receive, send)
