"""请求日志中间件."""
