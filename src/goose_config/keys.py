# str.isspace() 额外把 U+001C..U+001F (信息分隔符) 当成空白，它们不属于 Unicode White_Space
_SEPARATORS = frozenset("\x1c\x1d\x1e\x1f")


def name_to_key(name: str) -> str:
    """
    把可读名称规范化为存储 Key：去掉所有 Unicode 空白字符，再转小写。
    "My Group" / "mygroup" / " MY GROUP " 都会落到同一个 Key "mygroup"。
    """
    return "".join(ch for ch in name if not (ch.isspace() and ch not in _SEPARATORS)).lower()
