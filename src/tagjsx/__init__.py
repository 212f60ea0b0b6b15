from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("tagjsx")
except PackageNotFoundError:
    __version__ = "unknown"

from tagjsx.compiler.codegen.template import TemplateCodegen
from tagjsx.compiler.exceptions import JSXCompileError, JSXSyntaxError
from tagjsx.compiler.state import CompilerState
from tagjsx.compiler.transform import SourceTransformer, transform_source
from tagjsx.config import TransformOptions

__all__ = [
    "CompilerState",
    "JSXCompileError",
    "JSXSyntaxError",
    "SourceTransformer",
    "TemplateCodegen",
    "TransformOptions",
    "transform_source",
]
