# server.py
"""Local development server for the application directory."""

import functools
import logging
import os
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer

from sspa.errors import SourceDirectoryMissingError

logger = logging.getLogger(__name__)

DEFAULT_PORT = 9292
DEFAULT_DIRECTORY = "public"


class QuietHandler(SimpleHTTPRequestHandler):
    def log_message(self, format, *args):
        logger.info("%s - %s", self.address_string(), format % args)


def make_server(directory=DEFAULT_DIRECTORY, port=DEFAULT_PORT, host="127.0.0.1"):
    if not os.path.isdir(directory):
        raise SourceDirectoryMissingError(directory)
    handler = functools.partial(QuietHandler, directory=os.path.abspath(directory))
    return ThreadingHTTPServer((host, port), handler)


def serve(directory=DEFAULT_DIRECTORY, port=DEFAULT_PORT, host="127.0.0.1"):
    httpd = make_server(directory, port, host)
    logger.info(f"Serving {os.path.abspath(directory)} at http://{host}:{httpd.server_port}/")
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        logger.info("Server stopped.")
    finally:
        httpd.server_close()
