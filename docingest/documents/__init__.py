from docingest.documents.models import Document, DocumentList, FolderScope
from docingest.documents.normalizer import normalize, normalize_many

__all__ = ["Document", "DocumentList", "FolderScope", "normalize", "normalize_many"]
