"""公司信息服务."""
