"""Declarative lookup tables for store-layout receipts.

``ABBREVIATIONS`` expands the shorthand printed on Loblaw-family (Real Canadian
Superstore) receipts token by token. ``PRODUCT_KEYWORDS`` is the allow-list a
cleaned line must hit (directly or through an abbreviation key) before it is
accepted as an item.
"""

from __future__ import annotations

ABBREVIATIONS: dict[str, str] = {
    # brands
    "pc": "PC",
    "nn": "No Name",
    "bp": "Blue Menu",
    "ss": "Selection",
    # proteins
    "chk": "Chicken",
    "chkn": "Chicken",
    "brst": "Breast",
    "thgh": "Thighs",
    "bnls": "Boneless",
    "sknls": "Skinless",
    "grnd": "Ground",
    "bf": "Beef",
    "prk": "Pork",
    "tky": "Turkey",
    "slmn": "Salmon",
    "shrmp": "Shrimp",
    "bcn": "Bacon",
    "saus": "Sausage",
    # dairy
    "mlk": "Milk",
    "chs": "Cheese",
    "ched": "Cheddar",
    "mozz": "Mozzarella",
    "ygrt": "Yogurt",
    "yog": "Yogurt",
    "bttr": "Butter",
    "crm": "Cream",
    "lg": "Large",
    "xl": "Extra Large",
    "dz": "Dozen",
    # produce
    "org": "Organic",
    "grn": "Green",
    "bby": "Baby",
    "spn": "Spinach",
    "spnch": "Spinach",
    "tom": "Tomato",
    "toms": "Tomatoes",
    "pot": "Potato",
    "pots": "Potatoes",
    "ban": "Banana",
    "bana": "Bananas",
    "appl": "Apple",
    "strwb": "Strawberries",
    "blueb": "Blueberries",
    "lett": "Lettuce",
    "rom": "Romaine",
    "onn": "Onion",
    "grlc": "Garlic",
    "cuc": "Cucumber",
    "avo": "Avocado",
    "pep": "Pepper",
    "crt": "Carrots",
    "brcl": "Broccoli",
    "mush": "Mushrooms",
    "veg": "Vegetables",
    # pantry / bakery / snacks
    "whl": "Whole",
    "wht": "White",
    "ww": "Whole Wheat",
    "brd": "Bread",
    "pst": "Pasta",
    "spag": "Spaghetti",
    "rce": "Rice",
    "flr": "Flour",
    "sgr": "Sugar",
    "vin": "Vinegar",
    "sce": "Sauce",
    "cer": "Cereal",
    "gran": "Granola",
    "pb": "Peanut Butter",
    "ckie": "Cookies",
    "crkr": "Crackers",
    "chp": "Chips",
    "frz": "Frozen",
    # beverages
    "jce": "Juice",
    "wtr": "Water",
    "cof": "Coffee",
    "sprk": "Sparkling",
    # home / baby
    "dpr": "Diapers",
    "wps": "Wipes",
    "tp": "Toilet Paper",
    "ptwl": "Paper Towel",
    "det": "Detergent",
    "lndry": "Laundry",
}

PRODUCT_KEYWORDS: frozenset[str] = frozenset(
    {
        # produce
        "apple", "apples", "banana", "bananas", "orange", "oranges", "grapes",
        "berries", "strawberries", "blueberries", "raspberries", "lemon", "lemons",
        "lime", "limes", "avocado", "avocados", "mango", "pear", "pears", "peach",
        "lettuce", "romaine", "spinach", "kale", "carrot", "carrots", "tomato",
        "tomatoes", "cucumber", "pepper", "peppers", "onion", "onions", "potato",
        "potatoes", "broccoli", "cauliflower", "celery", "garlic", "ginger",
        "mushroom", "mushrooms", "zucchini", "cabbage", "cilantro", "parsley",
        "salad", "greens", "corn", "beans", "squash", "melon", "cantaloupe",
        "watermelon", "grape",
        # dairy & eggs
        "milk", "cheese", "cheddar", "mozzarella", "parmesan", "feta", "yogurt",
        "butter", "cream", "eggs", "egg", "kefir", "margarine",
        # meat & seafood
        "chicken", "beef", "pork", "turkey", "ham", "bacon", "sausage", "sausages",
        "steak", "salmon", "tuna", "shrimp", "fish", "cod", "tilapia", "breast",
        "thighs", "wings", "drumsticks", "ground", "lamb", "wieners", "meatballs",
        # pantry
        "rice", "pasta", "spaghetti", "penne", "macaroni", "noodles", "flour",
        "sugar", "salt", "oil", "olive", "vinegar", "sauce", "ketchup", "mustard",
        "mayo", "mayonnaise", "soup", "broth", "stock", "cereal", "oats",
        "oatmeal", "granola", "honey", "syrup", "jam", "peanut", "lentils",
        "chickpeas", "tortillas", "salsa", "spice", "coffee", "tea",
        # bakery
        "bread", "bagels", "bagel", "buns", "rolls", "muffins", "croissants",
        "cake", "cookies", "pita", "naan",
        # beverages
        "juice", "water", "soda", "pop", "cola", "drink", "beer", "wine",
        "sparkling", "kombucha",
        # frozen & snacks
        "frozen", "pizza", "fries", "nuggets", "ice", "chips", "crackers",
        "pretzels", "popcorn", "chocolate", "candy", "nuts", "almonds", "cashews",
        "bars",
        # home & baby
        "diapers", "wipes", "detergent", "soap", "tissue", "toilet", "paper",
        "towel", "towels", "foil", "bags", "shampoo", "toothpaste", "formula",
    }
)

__all__ = ["ABBREVIATIONS", "PRODUCT_KEYWORDS"]
