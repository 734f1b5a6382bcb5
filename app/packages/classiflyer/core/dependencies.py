"""依赖注入模块：封装 FastAPI 中复用度高的依赖函数。"""

from app.packages.classiflyer.db import session as db_session
from app.packages.classiflyer.db.store import DocumentStore


def get_store() -> DocumentStore:
    """返回进程内的文档存储。

    接口函数在调用业务服务时需持有 ``store.lock``，保证同一时刻只有一个请求
    读写快照。
    """
    return db_session.get_store()
