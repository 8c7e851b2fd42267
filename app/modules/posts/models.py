# MongoDB collection: posts
# This file documents the expected document shape
# Actual operations are handled via pymongo in service.py

"""
Expected MongoDB document structure:

posts:
- _id: ObjectId
- author: string - display name
- authorId: string
- authorAvatar: string (nullable)
- content: string
- imageUrl: string (nullable)
- likes: array of user id strings (may be missing on older documents)
- comments: array of embedded comments, append-only (may be missing)
    - id: string, "c" + epoch milliseconds
    - author: string
    - authorId: string
    - avatar: string (nullable)
    - comment: string
    - createdAt: date
- createdAt: date
"""

POSTS_COLLECTION = "posts"
