# Supabase tables: pending_homes, pending_home_images, rejection_categories
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

pending_homes (owner submissions awaiting moderation):
- id: bigint (primary key, identity)
- title, country, state, city, description: text
- price: numeric
- sqft: numeric
- bedrooms, bathrooms: integer (nullable)
- categories: text[]
- images: text[]
- user_id: uuid (foreign key to users.id) - submitter
- status: text - pending | approved | rejected | needs_revision
- admin_notes: text (nullable)
- approved_at, rejected_at: timestamp (nullable)
- rejection_reason: text (nullable)
- rejection_category: text (nullable, matches rejection_categories.name)
- admin_id: uuid (nullable)
- created_at, updated_at: timestamp

pending_home_images:
- id: uuid (primary key)
- home_id: bigint (foreign key to pending_homes.id)
- url: text

rejection_categories:
- id: bigint (primary key)
- name: text (unique)
- description: text (nullable)
- is_active: boolean (default: true)
- created_at: timestamp

Approval copies the row into homes (price and sqft as text) and marks the pending
row approved; the pending row is kept as the submitter's status history.
"""
