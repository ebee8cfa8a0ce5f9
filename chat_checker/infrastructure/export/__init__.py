from .json_exporter import ExportInfo, JsonExporter, export_timestamp, sanitize_label

__all__ = ["ExportInfo", "JsonExporter", "export_timestamp", "sanitize_label"]
