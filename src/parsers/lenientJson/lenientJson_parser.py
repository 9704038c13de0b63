from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, TypeAlias
import math
from lark import Token
from parsers.common import *
from lang_json.json_value import *
import common.log as log

grammarFile = grammarPath(__file__, 'lenientJson_grammar.lark')

INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1

# Any escaped character not listed here stands for itself.
ESCAPES = {
    'n': '\n',
    'r': '\r',
    '0': '\0',
    't': '\t',
    'v': '\v',
    'f': '\f',
    'b': '\b',
    'a': '\a',
}

class Phase(Enum):
    RAW = 'raw'
    ESCAPE = 'escape'

@dataclass(frozen=True)
class Ok:
    value: Value
    consumed: int

@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    pos: int
    msg: str

ParseResult: TypeAlias = Ok | Err

def unescapeString(raw: str) -> str:
    """
    Decodes a string literal starting with its opening quote. Scanning stops at
    the first unescaped quote; a literal without one decodes up to the end.
    """
    chars: list[str] = []
    phase = Phase.RAW
    for c in raw[1:]:
        if phase == Phase.ESCAPE:
            chars.append(ESCAPES.get(c, c))
            phase = Phase.RAW
        elif c == '\\':
            phase = Phase.ESCAPE
        elif c == '"':
            break
        else:
            chars.append(c)
    return ''.join(chars)

def numberValue(text: str, pos: int = 0) -> Int | Float:
    """
    Integers without fraction or exponent that fit into 64 bits become Int,
    everything else Float.
    """
    try:
        if not any(c in text for c in '.eE'):
            n = int(text)
            if INT_MIN <= n <= INT_MAX:
                return Int(n)
        f = float(text)
    except ValueError:
        raise ParseError(ErrorKind.INVALID_NUMBER, pos, f'invalid number {text!r}')
    if not math.isfinite(f):
        raise ParseError(ErrorKind.INVALID_NUMBER, pos, f'number out of range {text!r}')
    return Float(f)

def literalValue(text: str) -> Null | Bool:
    match text:
        case 'true':
            return Bool(True)
        case 'false':
            return Bool(False)
        case _:
            return Null()

def checkDepth(toks: TokenStream, depth: int, args: ParserArgs):
    if depth > args.maxDepth:
        tok = toks.lookahead()
        raise DepthLimitError(tok.start_pos if tok else toks.textLength,
                              f'nesting deeper than {args.maxDepth} levels')

def ruleValue(toks: TokenStream, depth: int, args: ParserArgs) -> Value:
    """
    Parses a number, a string, an array or an object.
    """
    match toks.lookaheadType():
        case 'NUMBER':
            tok = toks.next()
            return numberValue(tok.value, tok.start_pos)
        case 'STRING':
            return String(unescapeString(toks.next().value))
        case 'LBRACKET':
            return ruleArray(toks, depth + 1, args)
        case 'LBRACE':
            return ruleObject(toks, depth + 1, args)
        case 'LITERAL' if args.literals:
            return literalValue(toks.next().value)
        case None if toks.consumed == 0:
            raise ParseError(ErrorKind.EMPTY_INPUT, toks.textLength)
        case _:
            unexpectedToken(toks.lookahead(), toks.textLength, 'a value')

def ruleArray(toks: TokenStream, depth: int, args: ParserArgs) -> Array:
    """
    Parses an array. Commas are optional, but a single comma may follow each
    element. An array cut off by the end of input keeps what was read.
    """
    checkDepth(toks, depth, args)
    toks.ensureNext('LBRACKET')
    items: list[Value] = []
    while True:
        match toks.lookaheadType():
            case None:
                toks.consumeRest()
                break
            case 'RBRACKET':
                toks.next()
                break
            case _:
                items.append(ruleValue(toks, depth, args))
                toks.skip('COMMA')
    return Array(items)

def ruleObject(toks: TokenStream, depth: int, args: ParserArgs) -> Object:
    """
    Parses an object. Same leniency as arrays; the first entry for a key wins.
    """
    checkDepth(toks, depth, args)
    toks.ensureNext('LBRACE')
    entries: dict[str, Value] = {}
    while True:
        match toks.lookaheadType():
            case None:
                toks.consumeRest()
                break
            case 'RBRACE':
                toks.next()
                break
            case _:
                key, value = ruleEntry(toks, depth, args)
                if key in entries:
                    log.debug(f'Ignoring duplicate key {key!r}')
                else:
                    entries[key] = value
                toks.skip('COMMA')
    return Object(entries)

def ruleEntry(toks: TokenStream, depth: int, args: ParserArgs) -> tuple[str, Value]:
    tok = toks.lookahead()
    pos = tok.start_pos if tok else toks.textLength
    key = ruleValue(toks, depth, args)
    if not isinstance(key, String):
        raise ParseError(ErrorKind.NON_STRING_KEY, pos,
                         f'object key must be a string, got {type(key).__name__}')
    toks.skip('COLON')
    return (key.value, ruleValue(toks, depth, args))

def mkTokenStream(code: str) -> TokenStream:
    lexer = mkLexer(grammarFile)
    return TokenStream(lexer.lex(code), len(code))

def tokens(code: str) -> Iterator[Token]:
    toks = mkTokenStream(code)
    while toks.lookahead() is not None:
        yield toks.next()

def ruleTop(toks: TokenStream, args: ParserArgs) -> Value:
    """
    Parses the top-level value. A nesting limit beyond what the interpreter
    stack holds ends in the same error as exceeding maxDepth.
    """
    try:
        return ruleValue(toks, 0, args)
    except RecursionError:
        raise DepthLimitError(toks.consumed, 'nesting too deep for the interpreter stack') from None

def parse(code: str, args: ParserArgs | None = None) -> ParseResult:
    """
    Parses one value from the start of code. Text after the value is not
    looked at. On success, `consumed` counts the characters from the start of
    code (leading whitespace included) up to the end of the value.
    """
    args = args or ParserArgs()
    toks = mkTokenStream(code)
    try:
        value = ruleTop(toks, args)
    except ParseError as e:
        log.debug(f'Parse failed: {e}')
        return Err(e.kind, e.pos, e.msg)
    log.info(f'Parsed {type(value).__name__}, consumed {toks.consumed} of {len(code)} characters')
    return Ok(value, toks.consumed)

def parseDocument(code: str, args: ParserArgs | None = None) -> Value:
    """
    Parses code as a single value followed by nothing but whitespace.
    Raises ParseError on failure.
    """
    args = args or ParserArgs()
    toks = mkTokenStream(code)
    res = ruleTop(toks, args)
    toks.ensureEof()
    log.info(f'Parsed document of {len(code)} characters into {type(res).__name__}')
    return res
