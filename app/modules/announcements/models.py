# Supabase table: announcements
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- title: text (not null)
- message: text (not null)
- is_active: boolean (default: true)
- priority: integer (default: 0) - higher shows first
- expires_at: timestamp (nullable) - hidden from users after this
- created_by: uuid (nullable) - admin who posted it
- link: text (nullable)
- image_url: text (nullable)
- created_at: timestamp (default: now())
"""
