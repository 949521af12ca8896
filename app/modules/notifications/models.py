# Supabase tables: notifications, deleted_notifications
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

notifications:
- id: uuid (primary key)
- user_id: uuid (foreign key to users.id, nullable) - null means broadcast to everyone
- title: text (not null)
- message: text (not null)
- type: text - announcement | property | system | review | newProperty | priceDrop |
  openHouse | marketUpdate | agentMessage | savedSearch
- data: jsonb (default: {})
- is_read: boolean (default: false)
- created_at: timestamp (default: now())

deleted_notifications (per-user hide markers for broadcasts):
- notification_id: uuid (foreign key to notifications.id)
- user_id: uuid (foreign key to users.id)
- created_at: timestamp (default: now())
- unique constraint on (notification_id, user_id)

Push delivery reads users.metadata.pushToken and users.metadata.notificationPreferences.
"""
