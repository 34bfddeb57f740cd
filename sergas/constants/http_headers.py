"""HTTP 头常量."""


class HttpHeaders:
    """项目中引用的 HTTP 头名称."""

    CONTENT_TYPE = "Content-Type"
    AUTHORIZATION = "Authorization"
    X_REQUEST_ID = "X-Request-ID"
    X_FORWARDED_PROTO = "X-Forwarded-Proto"
