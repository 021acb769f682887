"""Backend access (Supabase)."""
