"""Taskboard 异常体系

服务层抛出带类型的异常，HTTP 层统一映射为状态码：
ValidationError -> 400，NotFoundError -> 404，StorageError -> 500。
"""


class TaskboardError(Exception):
    """Taskboard 基础异常"""

    def __init__(self, message: str, detail: str | None = None) -> None:
        """
        Args:
            message: 面向调用方的错误描述
            detail: 附加错误信息（序列化为响应体的 error 字段）
        """
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(TaskboardError):
    """必填字段缺失、枚举值非法或 ID 格式错误"""


class NotFoundError(TaskboardError):
    """指定 ID 的记录不存在"""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class StorageError(TaskboardError):
    """底层存储不可用或写入失败"""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        """
        Args:
            message: 失败的操作描述
            original_error: 原始驱动异常
        """
        super().__init__(
            message,
            detail=str(original_error) if original_error is not None else None,
        )
        self.original_error = original_error
