# Supabase table: property_removal_requests
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: bigint (primary key, identity)
- property_id: bigint - pending_homes.id of the submission (or homes.id for directly published listings)
- user_id: uuid (foreign key to users.id, not null)
- property_title: text
- removal_reason: text
- request_status: text - pending | approved | rejected
- admin_notes: text (nullable)
- processed_at: timestamp (nullable)
- processed_by: uuid (nullable) - admin who handled the request
- created_at, updated_at: timestamp
"""
