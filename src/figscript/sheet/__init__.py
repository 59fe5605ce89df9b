from figscript.sheet.parser import SheetError, parse_sheet
from figscript.sheet.model import Sheet, SheetRule, Selector

__all__ = ["parse_sheet", "SheetError", "Sheet", "SheetRule", "Selector"]
