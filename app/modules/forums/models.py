# Supabase tables: forum_posts, forum_comments, forum_likes
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

forum_posts:
- id: uuid (primary key)
- user_id: uuid (foreign key to users.id, not null)
- title: text (not null)
- content: text (not null)
- category: text - general | buying | selling | investing | neighborhood | expert
- tags: text[] (default: {})
- views, likes_count, replies_count: integer (default: 0)
- is_pinned, is_trending: boolean (default: false)
- created_at, updated_at: timestamp

forum_comments:
- id: uuid (primary key)
- post_id: uuid (foreign key to forum_posts.id)
- user_id: uuid (foreign key to users.id)
- comment: text
- likes_count: integer (default: 0)
- created_at, updated_at: timestamp

forum_likes:
- id: uuid (primary key)
- post_id: uuid (foreign key to forum_posts.id)
- user_id: uuid (foreign key to users.id)
- unique constraint on (post_id, user_id)

likes_count and replies_count are maintained by database triggers.
"""
