"""HTTP方法常量.

定义路由表允许声明的HTTP请求方法,避免魔法字符串.
"""

from typing import ClassVar


class HttpMethod:
    """HTTP方法常量.

    定义标准的HTTP请求方法(RFC 7231).
    """

    GET: ClassVar[str] = "GET"           # 获取资源
    POST: ClassVar[str] = "POST"         # 创建资源
    PUT: ClassVar[str] = "PUT"           # 更新资源(完整)
    PATCH: ClassVar[str] = "PATCH"       # 更新资源(部分)
    DELETE: ClassVar[str] = "DELETE"     # 删除资源
    HEAD: ClassVar[str] = "HEAD"         # 获取资源头信息
    OPTIONS: ClassVar[str] = "OPTIONS"   # 获取资源支持的方法

    ALL: ClassVar[tuple[str, ...]] = (
        GET,
        POST,
        PUT,
        PATCH,
        DELETE,
        HEAD,
        OPTIONS,
    )

    @classmethod
    def normalize(cls, method: str) -> str:
        """返回大写形式的方法名."""
        return method.strip().upper()

    @classmethod
    def is_valid(cls, method: str) -> bool:
        """判断HTTP方法是否受支持.

        Args:
            method: HTTP方法字符串,大小写不敏感

        Returns:
            bool: 是否为受支持的方法

        """
        return cls.normalize(method) in cls.ALL
