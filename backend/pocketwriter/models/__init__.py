from pocketwriter.models.article import Article
from pocketwriter.models.template import Template

__all__ = ["Article", "Template"]
