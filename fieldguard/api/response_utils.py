"""fieldguard - 统一错误响应工具.

校验失败与请求体解码失败都通过这里生成 JSON 响应, 避免在适配器中散落拼装逻辑.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import Response, jsonify

from fieldguard.api.error_mapping import build_error_payload, map_exception_to_status
from fieldguard.constants import HttpStatus

if TYPE_CHECKING:
    from fieldguard.errors import AppError
    from fieldguard.types import JsonDict


def unified_error_response(error: AppError, *, status_code: int | None = None) -> tuple[JsonDict, int]:
    """生成统一的错误响应载荷.

    Args:
        error: 项目内异常.
        status_code: HTTP 状态码, 缺省时根据异常类型映射.

    Returns:
        包含两个元素的元组:
        - 错误响应载荷字典
        - HTTP 状态码

    """
    payload = build_error_payload(error)
    final_status = status_code or map_exception_to_status(error, default=HttpStatus.INTERNAL_SERVER_ERROR)
    return payload, final_status


def jsonify_unified_error(error: AppError, *, status_code: int | None = None) -> tuple[Response, int]:
    """返回 Flask Response 对象的错误响应便捷函数."""
    payload, status = unified_error_response(error, status_code=status_code)
    return jsonify(payload), status


__all__ = ["jsonify_unified_error", "unified_error_response"]
