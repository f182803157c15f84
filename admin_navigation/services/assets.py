from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

STYLE = "style"
SCRIPT = "script"


@dataclass(frozen=True)
class Asset:
    handle: str
    src: str
    kind: str
    deps: Tuple[str, ...] = ()
    version: Optional[str] = None
    in_footer: bool = False

    @property
    def url(self) -> str:
        if not self.version:
            return self.src
        separator = "&" if "?" in self.src else "?"
        return f"{self.src}{separator}ver={self.version}"


class AssetLoader:
    """Builds URLs and cache-busting versions for built admin assets."""

    def __init__(self, base_url: str, version: str = "", *, css_version: Optional[str] = None, js_version: Optional[str] = None):
        self.base_url = base_url.rstrip("/")
        self.version = version
        self._versions = {"css": css_version or version, "js": js_version or version}

    def get_url(self, name: str, ext: str) -> str:
        return f"{self.base_url}/{name}.{ext}"

    def get_file_version(self, ext: str) -> str:
        return self._versions.get(ext, self.version)


class AssetQueue:
    """Per-request list of enqueued styles and scripts, in enqueue order."""

    def __init__(self, *, rtl: bool = False):
        self.rtl = rtl
        self._assets: Dict[Tuple[str, str], Asset] = {}

    def _enqueue(self, asset: Asset) -> bool:
        key = (asset.kind, asset.handle)
        if key in self._assets:
            logger.debug("Asset %s (%s) already enqueued", asset.handle, asset.kind)
            return False
        self._assets[key] = asset
        return True

    def enqueue_style(self, handle: str, src: str, deps: Sequence[str] = (), version: Optional[str] = None) -> bool:
        return self._enqueue(Asset(handle=handle, src=src, kind=STYLE, deps=tuple(deps), version=version))

    def enqueue_script(
        self,
        handle: str,
        src: str,
        deps: Sequence[str] = (),
        version: Optional[str] = None,
        in_footer: bool = False,
    ) -> bool:
        return self._enqueue(
            Asset(handle=handle, src=src, kind=SCRIPT, deps=tuple(deps), version=version, in_footer=in_footer)
        )

    def is_enqueued(self, handle: str, kind: Optional[str] = None) -> bool:
        return any(h == handle and (kind is None or k == kind) for k, h in self._assets)

    @property
    def styles(self) -> List[Asset]:
        return [asset for asset in self._assets.values() if asset.kind == STYLE]

    @property
    def scripts(self) -> List[Asset]:
        return [asset for asset in self._assets.values() if asset.kind == SCRIPT]

    def header_scripts(self) -> List[Asset]:
        return [asset for asset in self.scripts if not asset.in_footer]

    def footer_scripts(self) -> List[Asset]:
        return [asset for asset in self.scripts if asset.in_footer]

    def __len__(self) -> int:
        return len(self._assets)
