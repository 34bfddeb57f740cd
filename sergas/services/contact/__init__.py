"""联系留言服务."""
