"""常量定义：集中维护 HTTP 状态码、目录布局与快照版本等魔法值。"""

HTTP_STATUS_OK = 200
HTTP_STATUS_BAD_REQUEST = 400
HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_CONFLICT = 409

# 物理目录布局：<root>/Classiflyer/{All_Classeurs,Archives/<archive>}/...
CLASSIFLYER_DIR_NAME = "Classiflyer"
ALL_CLASSEURS_DIR_NAME = "All_Classeurs"
ARCHIVES_DIR_NAME = "Archives"
DEFAULT_ARCHIVE_FOLDER_NAME = "General"

# 快照文件
DEFAULT_DB_FILE_NAME = "db.json"
SNAPSHOT_SCHEMA_VERSION = 2
SNAPSHOT_COLLECTIONS = ("classeurs", "dossiers", "fichiers", "archiveFolders")

VIEW_MODES = ("grid", "list")
DEFAULT_VIEW_MODE = "grid"
DEFAULT_MIME_TYPE = "application/octet-stream"
