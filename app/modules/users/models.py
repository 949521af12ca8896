# Supabase table: users (public profile)
# Schema is documented in app/modules/auth/models.py
# Actual operations are handled via Supabase SDK in service.py

"""
Keys used inside users.metadata:
- role: text - shown in the admin user list
- pushToken: text - Expo push token of the user's device
- notificationPreferences: object
    newProperties, priceDrops, openHouses, marketUpdates, agentMessages,
    savedSearches (all boolean, default true)
"""
