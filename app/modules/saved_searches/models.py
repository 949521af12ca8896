# Supabase table: saved_searches
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- user_id: uuid (foreign key to users.id, not null)
- name: text (not null)
- criteria: jsonb - {minPrice, maxPrice, bedrooms, bathrooms, propertyType, location}, all optional
- is_active: boolean (default: true)
- last_checked: timestamp (nullable) - listings created after this are "new" for the search
- created_at: timestamp (default: now())
"""
