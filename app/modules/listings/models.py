# Supabase tables: homes, home_images
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

homes (published listings):
- id: bigint (primary key, identity)
- title: text (nullable)
- country: text (nullable)
- state: text (nullable)
- city: text (nullable)
- price: text (nullable) - free text as typed by the owner, e.g. "45,00,000"
- sqft: text (nullable)
- bedrooms: integer (nullable)
- bathrooms: integer (nullable)
- description: text (nullable)
- categories: text[] (nullable) - first element is the property type, the rest are facilities
- images: text[] (nullable) - public URLs or storage paths in the property images bucket
- user_id: uuid (foreign key to users.id, nullable) - owner
- archived_at: timestamp (nullable) - set when the property is sold
- created_at: timestamp (default: now())

home_images:
- id: uuid (primary key)
- home_id: bigint (foreign key to homes.id)
- image_url: text
- created_at: timestamp (default: now())
"""
