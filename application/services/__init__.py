from .conversion_engine import ConversionEngine
from .conversion_service import ConversionService
from .currency_metadata import CurrencyMetadata

__all__ = ['ConversionEngine', 'ConversionService', 'CurrencyMetadata']
