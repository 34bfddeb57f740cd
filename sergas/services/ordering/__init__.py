"""排序服务."""
