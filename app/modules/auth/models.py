# Supabase Auth + public.users / public.admin_users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Credentials live in Supabase Auth (auth.users). Every account also has a
profile row in public.users keyed by the auth user id.

users:
- id: uuid (primary key, references auth.users.id)
- email: text (unique, not null, stored lower-cased)
- name: text (not null)
- phone: text (nullable)
- avatar_url: text (nullable)
- is_verified: boolean (default: false)
- is_active: boolean (default: true) - inactive accounts cannot sign in
- last_login: timestamp (nullable)
- metadata: jsonb (default: {}) - role, pushToken, notificationPreferences
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

admin_users:
- id: uuid (primary key)
- email: text (unique, not null)
- name: text
- is_active: boolean (default: true)
- last_login: timestamp (nullable)
- updated_at: timestamp (nullable)

An admin signs in with a normal Supabase Auth account whose email (or id)
has an active admin_users row.
"""
