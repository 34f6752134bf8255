"""
Classic cocktail library seeded under the system user.

Entries omit the owner and image; `seed_classics` injects both. Names are
matched case-insensitively when re-seeding, so edits here update rows in place.
"""

PLACEHOLDER_IMAGE = {
    "url": "https://res.cloudinary.com/bartendershub/image/upload/v1/classics/placeholder.jpg",
    "publicId": "classics/placeholder",
}

CLASSIC_COCKTAILS = [
    {
        "name": "Old Fashioned",
        "description": "Whiskey, sugar, bitters. Late 19th-century classic emphasizing balance and aroma.",
        "ingredients": [
            {"name": "Bourbon or Rye Whiskey", "amount": "2", "unit": "oz"},
            {"name": "Simple Syrup (1:1)", "amount": "0.25", "unit": "oz"},
            {"name": "Angostura Bitters", "amount": "2", "unit": "dashes"},
            {"name": "Orange Twist", "amount": "1", "unit": "garnish", "optional": True},
        ],
        "instructions": [
            {"step": 1, "description": "Add syrup and bitters to chilled mixing glass."},
            {"step": 2, "description": "Add whiskey and ice, stir until chilled and properly diluted."},
            {"step": 3, "description": "Strain over large clear ice in a rocks glass."},
            {"step": 4, "description": "Express orange oils over the top and garnish."},
        ],
        "prep_time": 3,
        "servings": 1,
        "glass_type": "rocks",
        "garnish": "Orange twist",
        "tags": ["iba", "stirred", "whiskey-forward"],
        "alcohol_content": "high",
        "flavor": "bitter",
    },
    {
        "name": "Negroni",
        "description": "Equal parts gin, Campari, and sweet vermouth. Italian aperitivo balance of bitter and botanical.",
        "ingredients": [
            {"name": "Gin", "amount": "1", "unit": "oz"},
            {"name": "Campari", "amount": "1", "unit": "oz"},
            {"name": "Sweet Vermouth", "amount": "1", "unit": "oz"},
            {"name": "Orange Peel", "amount": "1", "unit": "garnish", "optional": True},
        ],
        "instructions": [
            {"step": 1, "description": "Add all ingredients to a mixing glass with ice."},
            {"step": 2, "description": "Stir until chilled (around 20-25 seconds)."},
            {"step": 3, "description": "Strain over fresh large ice in a rocks glass or serve up."},
            {"step": 4, "description": "Express orange peel over the drink and garnish."},
        ],
        "prep_time": 2,
        "servings": 1,
        "glass_type": "rocks",
        "garnish": "Orange peel",
        "tags": ["iba", "bitter", "aperitif"],
        "alcohol_content": "high",
        "flavor": "bitter",
    },
    {
        "name": "Boulevardier",
        "description": "Bourbon take on a Negroni.",
        "ingredients": [
            {"name": "Bourbon", "amount": "1.5", "unit": "oz"},
            {"name": "Campari", "amount": "1", "unit": "oz"},
            {"name": "Sweet Vermouth", "amount": "1", "unit": "oz"},
        ],
        "instructions": [
            {"step": 1, "description": "Add all ingredients to mixing glass with ice."},
            {"step": 2, "description": "Stir until chilled."},
            {"step": 3, "description": "Strain into a coupe or over a large cube."},
        ],
        "prep_time": 2,
        "servings": 1,
        "glass_type": "coupe",
        "tags": ["stirred", "whiskey"],
        "alcohol_content": "high",
        "flavor": "bitter",
    },
    {
        "name": "Manhattan",
        "description": "Rye (or bourbon), sweet vermouth, bitters. Iconic stirred whiskey classic.",
        "ingredients": [
            {"name": "Rye Whiskey", "amount": "2", "unit": "oz"},
            {"name": "Sweet Vermouth", "amount": "1", "unit": "oz"},
            {"name": "Angostura Bitters", "amount": "2", "unit": "dashes"},
        ],
        "instructions": [
            {"step": 1, "description": "Add all ingredients to a mixing glass with ice."},
            {"step": 2, "description": "Stir until very cold and properly diluted."},
            {"step": 3, "description": "Strain into a chilled coupe; garnish with cherry or twist."},
        ],
        "prep_time": 3,
        "servings": 1,
        "glass_type": "coupe",
        "tags": ["stirred", "whiskey", "iba"],
        "alcohol_content": "high",
        "flavor": "bitter",
    },
    {
        "name": "Daiquiri",
        "description": "Rum, lime, sugar. A study in balance; shaken citrus template.",
        "ingredients": [
            {"name": "White Rum", "amount": "2", "unit": "oz"},
            {"name": "Fresh Lime Juice", "amount": "1", "unit": "oz"},
            {"name": "Simple Syrup (1:1)", "amount": "0.75", "unit": "oz"},
        ],
        "instructions": [
            {"step": 1, "description": "Add all ingredients to a shaking tin with ice."},
            {"step": 2, "description": "Shake hard until well chilled and aerated."},
            {"step": 3, "description": "Double strain into a chilled coupe."},
        ],
        "prep_time": 2,
        "servings": 1,
        "glass_type": "coupe",
        "garnish": "None or lime twist",
        "tags": ["iba", "sour", "rum"],
        "alcohol_content": "medium",
        "flavor": "sour",
    },
    {
        "name": "Martini",
        "description": "Gin and dry vermouth, iconic minimalist aperitif. Ratios and dilution define style.",
        "ingredients": [
            {"name": "Gin", "amount": "2.5", "unit": "oz"},
            {"name": "Dry Vermouth", "amount": "0.5", "unit": "oz"},
            {"name": "Orange Bitters", "amount": "1", "unit": "dash", "optional": True},
            {"name": "Lemon Twist or Olive", "amount": "1", "unit": "garnish", "optional": True},
        ],
        "instructions": [
            {"step": 1, "description": "Add ingredients to a chilled mixing glass with quality ice."},
            {"step": 2, "description": "Stir until clear, cold and properly diluted."},
            {"step": 3, "description": "Strain into a chilled Nick & Nora or coupe."},
            {"step": 4, "description": "Garnish with lemon twist (express oils) or olive."},
        ],
        "prep_time": 3,
        "servings": 1,
        "glass_type": "nick-and-nora",
        "garnish": "Lemon twist or olive",
        "tags": ["iba", "stirred", "aperitif"],
        "alcohol_content": "high",
        "flavor": "bitter",
    },
    {
        "name": "Margarita",
        "description": "Tequila, orange liqueur and lime. The definitive tequila sour.",
        "ingredients": [
            {"name": "Blanco Tequila", "amount": "2", "unit": "oz"},
            {"name": "Orange Liqueur", "amount": "0.75", "unit": "oz"},
            {"name": "Fresh Lime Juice", "amount": "1", "unit": "oz"},
            {"name": "Salt", "amount": "1", "unit": "rim", "optional": True},
        ],
        "instructions": [
            {"step": 1, "description": "Salt half the rim of a chilled glass if desired."},
            {"step": 2, "description": "Shake all ingredients hard with ice."},
            {"step": 3, "description": "Strain into the glass over fresh ice or serve up."},
        ],
        "prep_time": 3,
        "servings": 1,
        "glass_type": "coupe",
        "garnish": "Lime wheel",
        "tags": ["iba", "sour", "tequila"],
        "alcohol_content": "medium",
        "flavor": "sour",
    },
    {
        "name": "Whiskey Sour",
        "description": "Bourbon, lemon and sugar, optionally silky with egg white.",
        "ingredients": [
            {"name": "Bourbon", "amount": "2", "unit": "oz"},
            {"name": "Fresh Lemon Juice", "amount": "0.75", "unit": "oz"},
            {"name": "Simple Syrup (1:1)", "amount": "0.75", "unit": "oz"},
            {"name": "Egg White", "amount": "1", "unit": "whole", "optional": True},
        ],
        "instructions": [
            {"step": 1, "description": "Dry shake all ingredients without ice if using egg white."},
            {"step": 2, "description": "Add ice and shake until well chilled."},
            {"step": 3, "description": "Strain into a rocks glass over fresh ice."},
        ],
        "prep_time": 4,
        "servings": 1,
        "glass_type": "rocks",
        "garnish": "Angostura drops and cherry",
        "tags": ["iba", "sour", "whiskey"],
        "alcohol_content": "medium",
        "flavor": "sour",
    },
]
