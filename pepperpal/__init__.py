"""PepperPal - community assistant pipeline for Peppercoin on Chiliz Chain."""

__version__ = "0.3.0"
__logo__ = "🌶️"
