from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from functools import cache
from typing import Iterator, NoReturn
import os
from lark import Lark, Token
from lark.exceptions import UnexpectedCharacters
import common.log as log

DEFAULT_MAX_DEPTH = 256

@dataclass
class ParserArgs:
    maxDepth: int = DEFAULT_MAX_DEPTH
    literals: bool = False

class ErrorKind(Enum):
    EMPTY_INPUT = 'empty input'
    UNEXPECTED_END = 'unexpected end of input'
    UNEXPECTED_CHARACTER = 'unexpected character'
    UNEXPECTED_TOKEN = 'unexpected token'
    INVALID_NUMBER = 'invalid number'
    NON_STRING_KEY = 'non-string key'
    DEPTH_EXCEEDED = 'depth limit exceeded'
    TRAILING_DATA = 'trailing data'

class ParseError(Exception):
    def __init__(self, kind: ErrorKind, pos: int, msg: str | None = None):
        self.kind = kind
        self.pos = pos
        self.msg = msg if msg is not None else kind.value
        super().__init__(f'{self.msg} at offset {pos}')

class DepthLimitError(ParseError):
    def __init__(self, pos: int, msg: str):
        super().__init__(ErrorKind.DEPTH_EXCEEDED, pos, msg)

def grammarPath(parserFile: str, grammarName: str) -> str:
    """
    Returns the path of a grammar file stored next to the given parser module.
    """
    return os.path.join(os.path.dirname(os.path.abspath(parserFile)), grammarName)

@cache
def mkLexer(grammarFile: str) -> Lark:
    log.debug(f'Loading grammar {grammarFile}')
    with open(grammarFile, encoding='utf-8') as f:
        grammar = f.read()
    return Lark(grammar, parser='lalr', lexer='basic')

def describe(tok: Token | None) -> str:
    if tok is None:
        return 'end of input'
    return f'{tok.type} {tok.value!r}'

class TokenStream:
    """
    Lazily pulls tokens from a lark lexer with one token of lookahead.

    Only the tokens the rules actually look at are lexed, so text after a
    complete value is never inspected. `consumed` is the end offset of the
    last token taken with `next`.
    """

    def __init__(self, tokens: Iterator[Token], textLength: int):
        self.tokens = iter(tokens)
        self.textLength = textLength
        self.buffered: Token | None = None
        self.exhausted = False
        self.consumed = 0

    def lookahead(self) -> Token | None:
        if self.buffered is None and not self.exhausted:
            try:
                self.buffered = next(self.tokens)
            except StopIteration:
                self.exhausted = True
                return None
            except UnexpectedCharacters as e:
                raise ParseError(ErrorKind.UNEXPECTED_CHARACTER, e.pos_in_stream,
                                 f'unexpected character {e.char!r}')
            log.debug(f'Token: {describe(self.buffered)} at {self.buffered.start_pos}')
        return self.buffered

    def lookaheadType(self) -> str | None:
        tok = self.lookahead()
        return None if tok is None else tok.type

    def next(self) -> Token:
        tok = self.lookahead()
        if tok is None:
            raise ParseError(ErrorKind.UNEXPECTED_END, self.textLength)
        self.buffered = None
        self.consumed = tok.end_pos
        return tok

    def skip(self, ty: str) -> bool:
        """
        Consumes the next token if it has the given type.
        """
        if self.lookaheadType() == ty:
            self.next()
            return True
        return False

    def ensureNext(self, ty: str) -> Token:
        tok = self.lookahead()
        if tok is None or tok.type != ty:
            unexpectedToken(tok, self.textLength, ty)
        return self.next()

    def consumeRest(self):
        """
        Marks the whole input as consumed. Used when a construct runs to end of input.
        """
        self.consumed = self.textLength

    def ensureEof(self):
        try:
            tok = self.lookahead()
        except ParseError as e:
            raise ParseError(ErrorKind.TRAILING_DATA, e.pos, f'extra data after value: {e.msg}')
        if tok is not None:
            raise ParseError(ErrorKind.TRAILING_DATA, tok.start_pos,
                             f'extra data after value: {describe(tok)}')

def unexpectedToken(tok: Token | None, textLength: int, expected: str) -> NoReturn:
    if tok is None:
        raise ParseError(ErrorKind.UNEXPECTED_END, textLength,
                         f'unexpected end of input, expected {expected}')
    raise ParseError(ErrorKind.UNEXPECTED_TOKEN, tok.start_pos,
                     f'unexpected token {describe(tok)}, expected {expected}')
