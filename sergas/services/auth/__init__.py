"""认证服务."""
