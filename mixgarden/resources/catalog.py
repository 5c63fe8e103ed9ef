"""模型与插件目录接口。"""

from typing import List, Optional, Set

from mixgarden.domain.models import Model, Plugin, unwrap_list
from mixgarden.transport.base import Transport


class ModelsResource:
    def __init__(self, transport: Transport):
        self._transport = transport

    async def list(self) -> List[Model]:
        data = await self._transport.execute("GET", "/models")
        return [Model.from_payload(item) for item in unwrap_list(data)]


class PluginsResource:
    """插件列表，后端按 page/limit 分页。"""

    def __init__(self, transport: Transport, page_size: int = 50):
        self._transport = transport
        self._page_size = max(1, page_size)

    async def list_page(self, page: int = 1, limit: Optional[int] = None) -> List[Plugin]:
        data = await self._transport.execute(
            "GET",
            "/plugins",
            query={"page": page, "limit": limit or self._page_size},
        )
        return [Plugin.from_payload(item) for item in unwrap_list(data)]

    async def list(self) -> List[Plugin]:
        """逐页累积插件。

        以下任一情况即停止翻页：
        - 某一页数量不足 page_size（包括空页）；
        - 某一页数量超过 page_size，说明后端忽略了分页参数、直接返回全集；
        - 某一页出现已收集过的 id，说明后端在重复返回同一页。
        """

        plugins: List[Plugin] = []
        seen: Set[str] = set()
        page = 1
        while True:
            batch = await self.list_page(page, self._page_size)
            fresh = [p for p in batch if not p.id or p.id not in seen]
            plugins.extend(fresh)
            seen.update(p.id for p in fresh if p.id)
            if len(batch) != self._page_size or len(fresh) < len(batch):
                return plugins
            page += 1
