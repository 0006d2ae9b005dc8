"""Ethereum contract ABI type grammar."""

from .parser import *
from .signature import FunctionSignature as FunctionSignature
from .signature import SignatureSyntaxError as SignatureSyntaxError
from .signature import parse_signature as parse_signature
from .signature import to_signature as to_signature
from .sizes import LayoutInfo as LayoutInfo
from .sizes import SizeCalculator as SizeCalculator
from .sizes import SizeInfo as SizeInfo
from .sizes import SizeKind as SizeKind
from .sizes import calculate_layout as calculate_layout
from .types import *
