import argparse
import sys
from parsers.common import DEFAULT_MAX_DEPTH, ParseError, ParserArgs
from parsers.lenientJson.lenientJson_parser import Err, parse, parseDocument, tokens
from lang_json.json_printer import printValue
import common.log as log

def readInput(path: str) -> str:
    if path == '-':
        return sys.stdin.read()
    with open(path, encoding='utf-8') as f:
        return f.read()

def main(argv: list[str] | None = None) -> int:
    """
    Parses a file and prints the value tree. Returns 0 on success and 1 on a
    parse error.
    """
    ap = argparse.ArgumentParser(prog='lenient-json', description='Lenient JSON parser')
    ap.add_argument('file', nargs='?', default='-', help='JSON file to parse, - for stdin')
    ap.add_argument('--max-depth', type=int, default=DEFAULT_MAX_DEPTH,
                    help='maximum nesting depth of arrays and objects')
    ap.add_argument('--literals', action='store_true', help='accept true, false and null')
    ap.add_argument('--prefix', action='store_true',
                    help='parse a value at the start of the input and ignore the rest')
    ap.add_argument('--tokens', action='store_true', help='dump the token stream and exit')
    ap.add_argument('--log-level', default='WARNING',
                    choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    args = ap.parse_args(argv)
    log.setLogLevel(args.log_level)

    code = readInput(args.file)
    parserArgs = ParserArgs(maxDepth=args.max_depth, literals=args.literals)
    try:
        if args.tokens:
            for tok in tokens(code):
                print(f'{tok.start_pos}:{tok.end_pos} {tok.type} {tok.value!r}')
            return 0
        if args.prefix:
            res = parse(code, parserArgs)
            if isinstance(res, Err):
                raise ParseError(res.kind, res.pos, res.msg)
            printValue(res.value)
            print(f'consumed {res.consumed} of {len(code)}', file=sys.stderr)
            return 0
        printValue(parseDocument(code, parserArgs))
        return 0
    except ParseError as e:
        print(f'ParseError: {e}', file=sys.stderr)
        return 1

if __name__ == '__main__':
    sys.exit(main())
