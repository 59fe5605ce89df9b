from figscript.parser.numeric import NumericLiteral, Unit, parse_numeric
from figscript.parser.tokenizer import split_segments, tokenize

__all__ = ["tokenize", "split_segments", "parse_numeric", "NumericLiteral", "Unit"]
