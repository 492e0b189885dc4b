"""Market alerts: watchlists, one-shot price alerts and a live quote stream."""
