"""项目服务."""
