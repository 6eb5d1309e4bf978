from typing import Any, Dict, Optional, Union


class Response:
    def __init__(
        self,
        body: Optional[Union[Dict[str, Any], Any, str, bytes]] = "",
        headers: Optional[Dict[str, str]] = None,
        status_code: int = 200,
        content_type: Union[str, None] = None,
    ):
        self.body: Optional[Union[Dict[str, Any], Any, str, bytes]] = body
        self.headers: Dict[str, str] = dict(headers) if headers else {}
        self.status_code: int = status_code
        self.content_type: Union[str, None] = content_type

    async def _asgi(self, send):
        await send(
            {
                "type": "http.response.start",
                "status": self.status_code,
                "headers": [
                    [key.encode("latin-1"), str(value).encode("latin-1")]
                    for key, value in self.headers.items()
                ],
            }
        )
        await send(
            {
                "type": "http.response.body",
                "body": self.body,
                "more_body": False,
            }
        )

    def __repr__(self) -> str:
        return f"<Response {self.status_code}>"
