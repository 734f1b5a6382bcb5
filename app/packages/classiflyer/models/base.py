"""模型基类：统一快照实体的序列化约定与软删除行为。

本模块集中提供：
- SnapshotModel：pydantic 基类，Python 侧使用 snake_case，落盘与接口输出使用 camelCase；
- SoftDeleteMixin：基于 `isDeleted`、`deletedAt` 字段的标记/还原方法，支撑回收站。
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SnapshotModel(BaseModel):
    """全局实体基类，保证快照 JSON 的字段命名与历史数据一致。"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_dict(self) -> dict[str, Any]:
        """导出为可直接写入 JSON 的字典（camelCase、ISO-8601 时间）。"""
        return self.model_dump(by_alias=True, mode="json")


class SoftDeleteMixin:
    """软删除行为，要求模型声明 ``is_deleted`` 与 ``deleted_at`` 字段。"""

    def mark_deleted(self, when: datetime) -> None:
        self.is_deleted = True
        self.deleted_at = when

    def mark_restored(self) -> None:
        self.is_deleted = False
        self.deleted_at = None
