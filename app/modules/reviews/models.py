# Supabase table: property_reviews
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- property_id: bigint (foreign key to homes.id, not null)
- user_id: uuid (foreign key to users.id, not null)
- rating: integer (1..5)
- comment: text (nullable)
- helpful_count: integer (default: 0)
- created_at: timestamp (default: now())
"""
