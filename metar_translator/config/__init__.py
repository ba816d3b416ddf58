from .settings import TranslatorSettings, load_settings

__all__ = ["TranslatorSettings", "load_settings"]
