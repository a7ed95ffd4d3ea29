from .json_contact_source import JsonContactSource

__all__ = ["JsonContactSource"]
