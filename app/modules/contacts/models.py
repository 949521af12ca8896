# Supabase table: contacts
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: bigint (primary key, identity)
- first_name: text
- last_name: text
- email: text
- phone: text
- message: text
- services: jsonb - list of service names the visitor is interested in
- created_at: timestamp (default: now())
"""
