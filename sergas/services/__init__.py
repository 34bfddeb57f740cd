"""业务服务层."""
