from .base import BaseAPIProvider, ExchangeRateProvider
from .fixerio import FixerIOProvider
from .openexchange import OpenExchangeProvider

__all__ = ['BaseAPIProvider', 'ExchangeRateProvider', 'FixerIOProvider', 'OpenExchangeProvider']
