# MongoDB collection: pets
# This file documents the expected document shape
# Actual operations are handled via pymongo in service.py

"""
Expected MongoDB document structure:

pets:
- _id: ObjectId
- name: string
- species: string (nullable)
- breed: string (nullable)
- age: string (nullable) - free text, e.g. "2 years"
- price: number (nullable) - only meaningful for Sale listings
- listingType: string - values: Sale, Adoption
- imageUrl: string (nullable)
- description: string (nullable)
- ownerId: string (nullable)
- ownerName: string (nullable)
- ownerEmail: string (nullable)
- createdAt: date
"""

PETS_COLLECTION = "pets"

LISTING_TYPES = ("Sale", "Adoption")
