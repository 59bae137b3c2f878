"""Small pure helpers: decimal coercion and trading calendar dates."""
