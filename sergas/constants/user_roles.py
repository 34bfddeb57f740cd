"""用户角色常量."""


class UserRole:
    """后台用户角色.

    admin 拥有全部权限; editor 只能访问 `permisos` 中开启的栏目.
    """

    ADMIN = "admin"
    EDITOR = "editor"

    ALL = (ADMIN, EDITOR)

    @classmethod
    def is_valid(cls, role: str) -> bool:
        """判断角色是否合法."""
        return role in cls.ALL
