"""HTTP listener bound to a Flask application.

The server object exists as soon as the app does so collaborators (route
registration, the dev client) can hold on to it, but no socket is opened until
`listen()` is called.
"""
from __future__ import annotations

from typing import Optional

from flask import Flask
from werkzeug.serving import BaseWSGIServer, make_server


class HttpServer:
    def __init__(self, app: Flask):
        self.app = app
        self._server: Optional[BaseWSGIServer] = None
        self._serving = False

    def __call__(self, environ, start_response):
        return self.app(environ, start_response)

    @property
    def listening(self) -> bool:
        return self._server is not None

    @property
    def port(self) -> Optional[int]:
        return self._server.server_port if self._server else None

    def listen(self, host: str = "0.0.0.0", port: int = 5000) -> "HttpServer":
        if self._server is not None:
            raise RuntimeError("server is already listening")
        self._server = make_server(host, port, self.app, threaded=True)
        return self

    def serve_forever(self) -> None:
        if self._server is None:
            raise RuntimeError("call listen() before serve_forever()")
        self._serving = True
        try:
            self._server.serve_forever()
        finally:
            self._serving = False

    def close(self) -> None:
        if self._server is not None:
            if self._serving:
                self._server.shutdown()
            self._server.server_close()
            self._server = None
