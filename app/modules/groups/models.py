# MongoDB collections: groups, messages
# This file documents the expected document shapes
# Actual operations are handled via pymongo in service.py

"""
Expected MongoDB document structure:

groups:
- _id: ObjectId
- name: string
- description: string (nullable)
- imageUrl: string (nullable)
- members: int - always equal to the size of memberIds
- memberIds: array of user id strings, no duplicates
- ownerId: string (nullable)
- createdAt: date

messages:
- _id: ObjectId
- groupId: ObjectId (reference to groups._id, not enforced)
- user: string - author display name
- userId: string
- message: string
- avatar: string (nullable)
- createdAt: date - messages are read sorted ascending on this field
"""

GROUPS_COLLECTION = "groups"
MESSAGES_COLLECTION = "messages"
