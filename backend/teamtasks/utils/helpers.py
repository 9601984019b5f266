from typing import Any, Iterable, List, Optional

TASK_STATUSES = ("open", "assigned", "done")
TEAMS = ("yazilim", "mekanik", "elektronik", "sosyal")

_TEAM_ALIASES = {
    "yazilim": "yazilim",
    "mekanik": "mekanik",
    "elektronik": "elektronik",
    "sosyal": "sosyal",
}


def normalize_team(raw: Any) -> Optional[str]:
    """'Yazılım', 'YAZILIM ' 같은 입력을 팀 enum 값으로 맞춘다. 알 수 없으면 None."""
    if not raw or not isinstance(raw, str):
        return None
    # 터키어 İ/ı 는 lower() 만으로 ascii i 가 되지 않는다
    text = raw.strip().replace("İ", "i").lower().replace("ı", "i")
    return _TEAM_ALIASES.get(text)


def unique_ids(values: Iterable[Optional[int]]) -> List[int]:
    seen = set()
    result = []
    for v in values:
        if v is None or v in seen:
            continue
        seen.add(v)
        result.append(v)
    return result
