"""Service implementations for the trade view domain."""
