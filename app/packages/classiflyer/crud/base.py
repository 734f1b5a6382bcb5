"""CRUD 基类：为各快照集合提供通用的数据访问方法。"""

from datetime import datetime
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar

from app.packages.classiflyer.db.store import DocumentStore
from app.packages.classiflyer.models.base import SnapshotModel

ModelType = TypeVar("ModelType", bound=SnapshotModel)


class CRUDBase(Generic[ModelType]):
    """封装常见的查询、创建与保存逻辑，减少重复代码。

    ``collection`` 既是快照中的集合字段名，也是 ``nextId`` 计数器的键。
    所有写操作默认立即落盘（``auto_commit=True``）；需要把多步修改合并为一次
    写入的调用方传入 ``auto_commit=False`` 并在最后调用 ``store.flush()``。
    """

    def __init__(self, model: Type[ModelType], collection: str):
        self.model = model
        self.collection = collection

    def _items(self, store: DocumentStore) -> List[ModelType]:
        attr = "archive_folders" if self.collection == "archiveFolders" else self.collection
        return getattr(store.data, attr)

    def _set_items(self, store: DocumentStore, items: List[ModelType]) -> None:
        attr = "archive_folders" if self.collection == "archiveFolders" else self.collection
        setattr(store.data, attr, items)

    @property
    def supports_soft_delete(self) -> bool:
        return "is_deleted" in self.model.model_fields

    def get(self, store: DocumentStore, id: Any) -> Optional[ModelType]:
        """按 ID 查找记录，包含已软删除的记录。"""
        for item in self._items(store):
            if item.id == id:
                return item
        return None

    def get_live(self, store: DocumentStore, id: Any) -> Optional[ModelType]:
        item = self.get(store, id)
        if item is None or getattr(item, "is_deleted", False):
            return None
        return item

    # 统一构造带软删除过滤的查询
    def query(
        self,
        store: DocumentStore,
        *,
        include_deleted: bool = False,
        where: Optional[Callable[[ModelType], bool]] = None,
    ) -> List[ModelType]:
        rows = self._items(store)
        if self.supports_soft_delete and not include_deleted:
            rows = [item for item in rows if not item.is_deleted]
        if where is not None:
            rows = [item for item in rows if where(item)]
        return list(rows)

    def create(self, store: DocumentStore, obj_in: Dict[str, Any], *, auto_commit: bool = True) -> ModelType:
        """分配 ID 与创建时间后追加到集合；调用方需事先完成全部校验。"""
        payload = {**obj_in}
        payload["id"] = store.next_id(self.collection)
        payload.setdefault("created_at", store.now())
        db_obj = self.model(**payload)
        self._items(store).append(db_obj)
        if auto_commit:
            store.flush()
        return db_obj

    def save(self, store: DocumentStore, db_obj: ModelType, *, auto_commit: bool = True) -> ModelType:
        if auto_commit:
            store.flush()
        return db_obj

    def soft_delete(
        self,
        store: DocumentStore,
        db_obj: ModelType,
        *,
        when: Optional[datetime] = None,
        auto_commit: bool = True,
    ) -> ModelType:
        """执行软删除，如果模型支持软删除字段则仅标记。"""
        if self.supports_soft_delete:
            db_obj.mark_deleted(when or store.now())
        else:
            self._set_items(store, [item for item in self._items(store) if item.id != db_obj.id])
        if auto_commit:
            store.flush()
        return db_obj

    def restore(self, store: DocumentStore, db_obj: ModelType, *, auto_commit: bool = True) -> ModelType:
        db_obj.mark_restored()
        if auto_commit:
            store.flush()
        return db_obj

    def hard_delete(self, store: DocumentStore, db_obj: ModelType, *, auto_commit: bool = True) -> None:
        """从快照中直接移除记录。"""
        self._set_items(store, [item for item in self._items(store) if item.id != db_obj.id])
        if auto_commit:
            store.flush()

    def list_deleted(self, store: DocumentStore) -> List[ModelType]:
        """回收站视图：全部软删除记录，按删除时间倒序。"""
        rows = [item for item in self._items(store) if getattr(item, "is_deleted", False)]
        rows.sort(key=lambda item: item.deleted_at.timestamp() if item.deleted_at else 0.0, reverse=True)
        return rows

    def purge_deleted(self, store: DocumentStore, *, auto_commit: bool = True) -> List[ModelType]:
        """永久移除全部软删除记录，返回被移除的记录。"""
        removed = [item for item in self._items(store) if getattr(item, "is_deleted", False)]
        if removed:
            self._set_items(store, [item for item in self._items(store) if not getattr(item, "is_deleted", False)])
            if auto_commit:
                store.flush()
        return removed

