# Supabase table: user_favorites
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- user_id: uuid (foreign key to users.id, not null)
- property_id: bigint (foreign key to homes.id, not null)
- created_at: timestamp (default: now())
- unique constraint on (user_id, property_id)
"""
