from .pagination import Page, paginate

__all__ = ['Page', 'paginate']
