"""CLI interface for moneytrack."""
