"""
HTTP request/response model and client.
"""

from embedded_servers.http.client import HttpClient, HttpxTransport
from embedded_servers.http.cookie import Cookie, cookie
from embedded_servers.http.header import HttpHeader, header
from embedded_servers.http.method import HttpMethod
from embedded_servers.http.parameter import HttpParameter, param
from embedded_servers.http.request import HttpRequest, Transport
from embedded_servers.http.response import HttpResponse

__all__ = [
    "Cookie",
    "HttpClient",
    "HttpHeader",
    "HttpMethod",
    "HttpParameter",
    "HttpRequest",
    "HttpResponse",
    "HttpxTransport",
    "Transport",
    "cookie",
    "header",
    "param",
]
