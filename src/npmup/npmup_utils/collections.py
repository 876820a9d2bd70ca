"""
大小写不敏感的字典。

配置键既可以来自YAML文件（如 ``package_manager``），也可以来自环境变量
（如 ``NPMUP_PACKAGE_MANAGER``），这里统一按小写形式存取。
"""

from typing import Any
from typing import Dict
from typing import Iterator
from typing import Mapping
from typing import Optional
from typing import Union


class CaseInsensitiveDict(Mapping[str, Any]):
    """
    大小写不敏感的字典类。

    内部使用小写形式存储键，但保留了原始的键名用于迭代和显示。

    示例:
        >>> d = CaseInsensitiveDict({'Package_Manager': 'pnpm'})
        >>> d['package_manager']
        'pnpm'
        >>> list(d.keys())
        ['Package_Manager']
    """

    def __init__(
        self, data: Optional[Union[Dict[str, Any], "CaseInsensitiveDict"]] = None
    ) -> None:
        self._data: Dict[str, Any] = {}
        self._case_map: Dict[str, str] = {}  # 小写键 -> 原始键的映射

        if data is not None:
            if isinstance(data, CaseInsensitiveDict):
                self._data = data._data.copy()
                self._case_map = data._case_map.copy()
            elif hasattr(data, "items"):
                for key, value in data.items():
                    self[key] = value

    def __getitem__(self, key: str) -> Any:
        if not isinstance(key, str):
            raise TypeError(f"键必须是字符串类型，得到 {type(key).__name__}")

        lower_key = key.lower()
        if lower_key not in self._case_map:
            raise KeyError(key)

        return self._data[lower_key]

    def __setitem__(self, key: str, value: Any) -> None:
        if not isinstance(key, str):
            raise TypeError(f"键必须是字符串类型，得到 {type(key).__name__}")

        lower_key = key.lower()
        # 如果键已存在，保持原有的原始键名
        if lower_key not in self._case_map:
            self._case_map[lower_key] = key
        self._data[lower_key] = value

    def __delitem__(self, key: str) -> None:
        lower_key = key.lower()
        if lower_key not in self._case_map:
            raise KeyError(key)

        del self._case_map[lower_key]
        del self._data[lower_key]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return key.lower() in self._case_map

    def __iter__(self) -> Iterator[str]:
        """返回键的迭代器，保持原始大小写。"""
        return iter(self._case_map.values())

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = {self._case_map[k]: v for k, v in self._data.items()}
        return f"CaseInsensitiveDict({items!r})"

    def update(self, other: Mapping[str, Any]) -> None:
        """批量设置键值对。"""
        for key, value in other.items():
            self[key] = value
