"""
HTTP header names and media types.
"""

ACCEPT = "Accept"
ACCEPT_ENCODING = "Accept-Encoding"
ACCEPT_LANGUAGE = "Accept-Language"
CACHE_CONTROL = "Cache-Control"
CONTENT_ENCODING = "Content-Encoding"
CONTENT_TYPE = "Content-Type"
COOKIE = "Cookie"
ETAG = "ETag"
IF_MATCH = "If-Match"
IF_MODIFIED_SINCE = "If-Modified-Since"
IF_NONE_MATCH = "If-None-Match"
IF_UNMODIFIED_SINCE = "If-Unmodified-Since"
LOCATION = "Location"
ORIGIN = "Origin"
REFERER = "Referer"
USER_AGENT = "User-Agent"
REQUESTED_WITH = "X-Requested-With"
X_CSRF_TOKEN = "X-CSRF-Token"
X_HTTP_METHOD_OVERRIDE = "X-HTTP-Method-Override"

# Media types
APPLICATION_JSON = "application/json"
APPLICATION_XML = "application/xml"
APPLICATION_FORM_URL_ENCODED = "application/x-www-form-urlencoded"
MULTIPART_FORM_DATA = "multipart/form-data"

# Value of X-Requested-With for asynchronous browser requests
XML_HTTP_REQUEST = "XMLHttpRequest"

GZIP_DEFLATE = "gzip, deflate"

# Headers that may carry several values; other headers are replaced when set again
MULTI_VALUED_HEADERS = frozenset(
    name.lower() for name in (ACCEPT, ACCEPT_ENCODING, ACCEPT_LANGUAGE, IF_MATCH, IF_NONE_MATCH)
)
