from .bootstrap import bootstrap, create_annotator, create_loop, load_engines
from .context import RuntimeContext

__all__ = ["bootstrap", "create_annotator", "create_loop", "load_engines", "RuntimeContext"]
