import orjson


class JSONError(Exception):
    pass


class JSONDecodeError(JSONError):
    pass


class JSONEncodeError(JSONError):
    pass


def dumps(obj) -> bytes:
    try:
        return orjson.dumps(obj)
    except orjson.JSONEncodeError as e:
        raise JSONEncodeError(*e.args) from e


def loads(obj: str | bytes | bytearray):
    try:
        return orjson.loads(obj)
    except orjson.JSONDecodeError as e:
        raise JSONDecodeError(*e.args) from e
