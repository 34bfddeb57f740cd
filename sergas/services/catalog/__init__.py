"""可排序集合(工种、统计数字、知识库)写服务."""
