from .json_export import export_json, to_json

__all__ = ["export_json", "to_json"]
