"""归档文件夹数据访问。"""

from typing import Optional

from app.packages.classiflyer.crud.base import CRUDBase
from app.packages.classiflyer.db.store import DocumentStore
from app.packages.classiflyer.models.archive_folder import ArchiveFolder


class CRUDArchiveFolder(CRUDBase[ArchiveFolder]):
    def get_by_name(self, store: DocumentStore, name: str) -> Optional[ArchiveFolder]:
        for item in self._items(store):
            if item.name == name:
                return item
        return None


archive_folder_crud = CRUDArchiveFolder(ArchiveFolder, "archiveFolders")
