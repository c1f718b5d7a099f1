"""hypernote: render interlinked notes into browsable hypertext."""

__version__ = "0.1.0"
