from .file_writer import SplitFileWriter, relative_script_path
from .logger import setup_logger

__all__ = ["SplitFileWriter", "relative_script_path", "setup_logger"]
