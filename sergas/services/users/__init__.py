"""用户管理服务."""
