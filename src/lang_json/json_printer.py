from __future__ import annotations
from lang_json.json_value import *

# Inverse of the parser's escape table, plus the quote and the backslash.
_ESCAPES = {
    '\n': '\\n',
    '\r': '\\r',
    '\0': '\\0',
    '\t': '\\t',
    '\v': '\\v',
    '\f': '\\f',
    '\b': '\\b',
    '\a': '\\a',
    '"': '\\"',
    '\\': '\\\\',
}

def renderString(s: str) -> str:
    return '"' + ''.join(_ESCAPES.get(c, c) for c in s) + '"'

def render(v: Value) -> str:
    """
    Renders a value as JSON-like text that the lenient parser reads back.
    """
    match v:
        case Null():
            return 'null'
        case Bool(b):
            return 'true' if b else 'false'
        case Int(i):
            return str(i)
        case Float(f):
            return repr(f)
        case String(s):
            return renderString(s)
        case Array(items):
            return '[' + ', '.join(render(x) for x in items) + ']'
        case Object(entries):
            pairs = [f'{renderString(k)}: {render(x)}' for k, x in entries.items()]
            return '{' + ', '.join(pairs) + '}'

def printValue(v: Value):
    print(render(v))
