# Supabase tables read by the admin panel: homes, home_images, pending_homes,
# pending_home_images, users, admin_users, subscriptions, contacts, property_removal_requests
# This file documents the tables not described by another module
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

subscriptions:
- id: bigint (primary key, identity)
- email: text
- plan: text
- status: text - e.g. active | cancelled | expired
- expires_at: timestamp
- created_at: timestamp (default: now())

Admin routes use the service_role client so that moderation is not limited by RLS.
"""
