"""Wire encoders for metric lines."""
