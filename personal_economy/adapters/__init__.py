"""Entry points wiring use cases to the command line and the dashboard."""
