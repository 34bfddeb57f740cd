"""Resource 辅助(封套、权限装饰器、排序)."""
