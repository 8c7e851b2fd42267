"""
Demo content for local development.
Used by app/scripts/seed_demo_data.py; documents are matched on their natural
key (group/pet name, post author + content) so reseeding never duplicates.
"""

DEMO_DATA = {
    "groups": [
        {
            "name": "Golden Retriever Owners",
            "description": "Tips, photos and meetups for golden retriever families.",
            "imageUrl": "https://placehold.co/600x400.png",
            "ownerId": "demo-owner-1",
        },
        {
            "name": "Cat Adoption Network",
            "description": "Helping rescue cats find their forever homes.",
            "imageUrl": "https://placehold.co/600x400.png",
            "ownerId": "demo-owner-2",
        },
        {
            "name": "First-Time Pet Parents",
            "description": "No question is too small.",
            "imageUrl": "https://placehold.co/600x400.png",
            "ownerId": "demo-owner-1",
        },
    ],
    "posts": [
        {
            "author": "Priya",
            "authorId": "demo-owner-1",
            "authorAvatar": "https://api.dicebear.com/7.x/initials/svg?seed=Priya",
            "content": "Max finally learned to fetch without running off with the ball!",
            "imageUrl": None,
        },
        {
            "author": "Tom",
            "authorId": "demo-owner-2",
            "authorAvatar": "https://api.dicebear.com/7.x/initials/svg?seed=Tom",
            "content": "Any recommendations for a grain-free kitten food?",
            "imageUrl": None,
        },
    ],
    "pets": [
        {
            "name": "Bella",
            "species": "Dog",
            "breed": "Golden Retriever",
            "age": "8 months",
            "price": 450.0,
            "listingType": "Sale",
            "imageUrl": "https://placehold.co/600x400.png",
            "description": "Vaccinated, house-trained and great with kids.",
            "ownerId": "demo-owner-1",
            "ownerName": "Priya",
            "ownerEmail": "priya@example.com",
        },
        {
            "name": "Whiskers",
            "species": "Cat",
            "breed": "Domestic Shorthair",
            "age": "2 years",
            "price": None,
            "listingType": "Adoption",
            "imageUrl": "https://placehold.co/600x400.png",
            "description": "Calm indoor cat looking for a quiet home.",
            "ownerId": "demo-owner-2",
            "ownerName": None,
            "ownerEmail": None,
        },
    ],
}
