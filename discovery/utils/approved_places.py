"""
Approved place names — the public visibility whitelist.

Only places whose name appears here (case-insensitively) are returned by the
public places endpoints and kept by scripts/cleanup_places.py. Name variants
seen in imported data are listed next to the canonical spelling.
"""

APPROVED_PLACES_WHITELIST: list[str] = [
    "31st Floor - High Ultra Lounge",
    "RIM NAAM",
    "Swwing",
    "Salt",
    "Muro",
    "MIRTH",
    "Jamavar",
    "Dakshin",
    "Alba",
    "Olive Beach",
    "Bastian",
    "Urban Solace",
    "The Roastery",
    "The Kind Roastery",
    "Writer's Cafe",
    "Dyu Art Cafe",
    "Lazy Suzy",
    "Animane",
    "AINmane",
    "Cafe Max",
    "Cumulus Cafe",
    "Cumulus Cafe AT MAP BANGALORE",
    "Subko Coffee",
    "Subko Coffee INDIRANAGAR",
    "Subko Ajji",
    "Subko Ajji HOUSE",
    "Ner.lu Cafe",
    "Nerlu Cafe INDIRANAGAR",
    "3rd Wave",
    "3rd Wave INDIRANAGAR",
    "Havu Cafe",
    "HUvu Cafe INDIRANAGAR",
    "Temple of the Senses",
    "Monkey Tree Cafe",
    "WATER MONkey Cafe",
    "Blue Tokai",
    "Blue Tokai INDIRANAGAR",
    "Humble Bean",
    "Humble Bean INDIRANAGAR",
    "Kink Coffee",
    "Kink Coffee INDIRANAGAR",
    "Nuage Cafe",
    "Nuage Cafe INDIRANAGAR",
    "By2Coffee",
    "By2 Coffee MALLESWARAM",
    "Brezelhaus",
    "Brezelhaus INDIRANAGAR",
    "Copper and Clove",
    "Copper + CloveS INDIRANAGAR",
    "Koshys",
    "Koshy's",
    "Koshy's Restaurant",
    "The Bangalore Cafe",
    "21A",
    "21ST AMENDMENT",
    "Smoke House Deli",
    "Pangeo",
    "Cafe Terra",
    "Nevermind",
    "Vidyarthi Bhavan",
    "CTR",
    "CTR (Central Tiffin Room)",
    "Shri Sagar (CTR)",
    "Sante Spa Cuisine",
    "Clean and Green",
    "Clean and Green INDIRANAGAR",
    "Kale Salads and Co",
    "Kale - A SALAD SYMPHONY",
    "Kaavu",
    "Roomali",
    "Concu",
    "Based on a True Story",
    "Based on a True Story - KAMMANAHALLI",
    "Lucky Chan",
    "Dam's Kitchen",
    "Mamagoto",
    "Burma Burma",
    "Chinita",
    "Chinita'S",
    "Phobidden Fruit",
    "Wanley",
    "Wanley Restaurant",
    "Kopitiam Lah",
    "Kazan",
    "Izanagi",
    "Kuuraku",
    "Uno Izakaya",
    "Harumi",
    "Mandarin Box",
    "Shiro",
    "DOFU",
    "Kawaii",
    "Kawaii INDIRANAGAR MOCHA PLACE",
    "Moglu Kitchen",
    "Little Italy",
    "Pasta Street",
    "Dolci",
    "Dolci DESSERTS",
    "Bologna",
    "Ciros",
    "Ciro'S PIZZERIA",
    "Spettacolare",
    "Amicii",
    "Bangalore Dhabha",
    "THE Bangalore Dhabha - KALYAN NAGAR",
    "Araku",
    "Araku COFFEE",
    "Madurai Hut",
    "Tandoori Taal",
    "Malabar Hotel",
    "Malabar Hotel, CV RAMAN NAGAR",
    "Qissa",
    "Qissa ARABIC RESTAURANT",
    "Savoury",
    "KARAMA",
    "Thapakkatty",
    "Dindigul Thalappakatti Restaurant",
    "Habba Kadal",
    "Bengaluru Oota Company",
    "Mahesh Lunch Home",
    "Lucknow Street",
    "Arambam",
    "Arambam INDIRANAGAR",
    "Suvai",
    "SuvaiI - A PANDYAN LEGACY INDIRANAGAR",
    "Imperial",
    "Navu Project",
    "Kerala Pavilion",
    "Rumi",
    "Karim's",
    "The Druid Garden",
    "The Biere Club",
    "Balcony Bar",
    "Candles Brewhouse",
    "Murphys",
    "Murphy'S BREWHOUSE",
    "One X Commune",
    "Three Dots and a Dash",
    "Three Dots and a Dash INDIRANAGAR",
    "Jook Taproom",
    "Hangover",
    "Pecos",
    "1131",
    "Arbor Brewing Company",
    "Float",
    "Shangri La",
    "SSAFRON AT Shangri La",
    "We: neighbourgood",
    "Chinlungs Brewery",
    "Hops Haus",
    "Toast and Tonic",
    "Toast & Tonic",
    "Bob's",
    "Dublin Windsor",
    "Arena",
    "13th Floor MG Road",
    "The 13th Floor",
    "Sugar Factory - Reloaded",
    "Social",
    "Bombay Adda",
    "NoLimmits",
    "Daddy's",
    "JCK Momos",
    "Thom's Bakery",
    "Chai Patty",
    "ZAMA",
    "Fennys",
    "Nanav",
    "Secret Story",
    "Rigasto",
    "Sodabottle Openerwala",
    "Citrus Trails",
    "Citrus Trail Farm & Kitchen",
    "Anaia",
    "Windmills",
    "Windmills Craftworks",
    "Tiger Trail",
    "Cafe Noir",
    "Kobe Sizzlers",
    "Paragon",
    "Tres Leches Creamery",
    "LICK",
    "Ulo",
    "Toit Brewpub",
    "Phoenix MarketCity",
    "Cubbon Park",
    "Commercial Street",
    "Vidhana Soudha",
    "Third Wave Coffee",
    "Third Wave Coffee Roasters",
    "Corner House Ice Cream",
    "99 Variety Dosa",
    "Bangalore Club",
    "Bangalore Fort",
    "Bangalore Golf Club",
    "Bangalore Palace",
    "Bannerghatta National Park",
    "Blossom Book House",
    "Blue Tokai Coffee Roasters",
    "Brahmin's Coffee Bar",
    "Brigade Road",
    "Byg Brewski Brewing Company",
    "Cafe Coffee Day - MG Road",
    "Defence Colony Park",
    "Ebony",
    "Empire Restaurant",
    "Fenny's Lounge",
    "Forum Mall",
    "Gilly's Redefined",
    "Glen's Bakehouse",
    "HAL Heritage Centre",
    "High Ultra Lounge",
    "Indian Coffee House",
    "ISKCON Temple",
    "Lalbagh Botanical Garden",
    "Lavonne Cafe",
    "Loft 38",
    "Matteo Coffea",
    "Meghana Foods",
    "Monkey Bar",
    "MTR 1924",
    "Museum of Art & Photography",
    "Nagarjuna",
    "Nandhana Palace",
    "National Gallery of Modern Art",
    "Punjabi Rasoi",
    "Roastery Coffee House",
    "Sankey Tank",
    "Skyye Lounge",
    "Sly Granny",
    "Soul Santé Cafe",
    "South Thindies",
    "The Fatty Bao",
    "The Hole in the Wall Cafe",
    "The Leela Palace",
    "The Oberoi",
    "The Only Place",
    "UB City Mall",
    "Ulsoor Lake",
    "Vapour Pub & Brewery",
    "Veena Stores",
    "VV Puram Food Street",
    "Yogisthaan Cafe",
]

APPROVED_PLACES_SET: frozenset[str] = frozenset(
    name.lower() for name in APPROVED_PLACES_WHITELIST
)


def is_approved_place(name: str) -> bool:
    """Case-insensitive whitelist membership."""
    return name.strip().lower() in APPROVED_PLACES_SET
