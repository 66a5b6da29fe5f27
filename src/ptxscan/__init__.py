"""
Ptx Module Scanner

Parse PTX assembly text into functions and global declarations without
copying the source.
"""

__version__ = "0.1.0"


from ._error import *
from ._text import *
from ._comment import *
from ._function import *
from ._preamble import *
from ._global import *
from ._module import *
