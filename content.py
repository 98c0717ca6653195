"""
Bilingual string tables.

Every page has one dictionary keyed by language ("en" / "ka").
"""
from schemas import Language

LANGUAGES = ("en", "ka")
DEFAULT_LANGUAGE = "en"


def other_language(language: Language) -> Language:
    return "ka" if language == "en" else "en"


def translate(table: dict, language: Language) -> dict:
    return table[language]


NAVIGATION = [
    {"name": {"en": "Home", "ka": "მთავარი"}, "href": "/"},
    {"name": {"en": "Products", "ka": "პროდუქტები"}, "href": "/products"},
    {"name": {"en": "About", "ka": "ჩვენ შესახებ"}, "href": "/about"},
    {"name": {"en": "Contact", "ka": "კონტაქტი"}, "href": "/contact"},
]

# Label shown on the language switch: the language you would switch *to*
LANGUAGE_SWITCH_LABEL = {"en": "ქარ", "ka": "ENG"}

SIGN_IN_PROMPT = {
    "title": "Piwkina.ge",
    "message": "Please sign in to access the Piwkina.ge e-commerce platform",
    "action": "Sign In",
}

LOADING_MESSAGE = "Loading..."

FOOTER = {
    "en": {
        "company": "Piwkina.ge",
        "description": "Traditional Georgian roasted pork delivery service",
        "contact": "Contact Information",
        "phone": "+995 555 123 456",
        "email": "info@piwkina.ge",
        "address": "Tbilisi, Georgia",
        "quickLinks": "Quick Links",
        "followUs": "Follow Us",
        "rights": "© 2024 Piwkina.ge. All rights reserved.",
    },
    "ka": {
        "company": "Piwkina.ge",
        "description": "ტრადიციული ქართული შემწვარი გოჭის მიტანის სერვისი",
        "contact": "საკონტაქტო ინფორმაცია",
        "phone": "+995 555 123 456",
        "email": "info@piwkina.ge",
        "address": "თბილისი, საქართველო",
        "quickLinks": "სწრაფი ბმულები",
        "followUs": "გამოგვყევით",
        "rights": "© 2024 Piwkina.ge. ყველა უფლება დაცულია.",
    },
}

SOCIAL_LINKS = ["https://facebook.com", "https://instagram.com"]

HOME = {
    "en": {
        "hero": {
            "title": "Traditional Georgian Roasted Pork",
            "subtitle": "Authentic flavors delivered fresh to your door",
            "cta": "Order Now",
            "viewProducts": "View All Products",
        },
        "features": {
            "title": "Why Choose Piwkina.ge?",
            "items": [
                {"title": "Premium Quality", "description": "Only the finest ingredients and traditional recipes"},
                {"title": "Fresh Daily", "description": "Prepared fresh every day with authentic Georgian methods"},
                {"title": "Fast Delivery", "description": "Quick and reliable delivery throughout Tbilisi"},
            ],
        },
        "products": {"title": "Featured Products", "pricePerKg": "per kg", "addToCart": "Add to Cart"},
    },
    "ka": {
        "hero": {
            "title": "ტრადიციული ქართული შემწვარი გოჭი",
            "subtitle": "ავთენტური გემო მიტანილი ახლად თქვენს კართან",
            "cta": "შეკვეთა ახლავე",
            "viewProducts": "ყველა პროდუქტის ნახვა",
        },
        "features": {
            "title": "რატომ აირჩიოთ Piwkina.ge?",
            "items": [
                {"title": "პრემიუმ ხარისხი", "description": "მხოლოდ საუკეთესო ინგრედიენტები და ტრადიციული რეცეპტები"},
                {"title": "ყოველდღე ახალი", "description": "ყოველდღე ახლად მომზადებული ავთენტური ქართული მეთოდებით"},
                {"title": "სწრაფი მიტანა", "description": "სწრაფი და საიმედო მიტანა მთელ თბილისში"},
            ],
        },
        "products": {"title": "რჩეული პროდუქტები", "pricePerKg": "კგ-ზე", "addToCart": "კალათაში დამატება"},
    },
}

PRODUCTS = {
    "en": {
        "title": "Our Products",
        "subtitle": "Fresh, traditional Georgian roasted pork delivered to your door",
        "search": "Search products...",
        "category": "Category",
        "allCategories": "All Categories",
        "pricePerKg": "per kg",
        "addToCart": "Add to Cart",
        "quantity": "Quantity (kg)",
        "noProducts": "No products found",
        "noProductsDesc": "Try adjusting your search or filter criteria",
    },
    "ka": {
        "title": "ჩვენი პროდუქტები",
        "subtitle": "ახალი, ტრადიციული ქართული შემწვარი გოჭი მიტანილი თქვენს კართან",
        "search": "პროდუქტების ძიება...",
        "category": "კატეგორია",
        "allCategories": "ყველა კატეგორია",
        "pricePerKg": "კგ-ზე",
        "addToCart": "კალათაში დამატება",
        "quantity": "რაოდენობა (კგ)",
        "noProducts": "პროდუქტები ვერ მოიძებნა",
        "noProductsDesc": "სცადეთ ძიების ან ფილტრის კრიტერიუმების შეცვლა",
    },
}

CATEGORY_NAMES = {
    "en": {"all": "All Categories", "main": "Main Products", "special": "Special Items", "seasonal": "Seasonal"},
    "ka": {"all": "ყველა კატეგორია", "main": "მთავარი პროდუქტები", "special": "სპეციალური", "seasonal": "სეზონური"},
}

CART = {
    "en": {
        "title": "Shopping Cart",
        "emptyCart": "Your cart is empty",
        "emptyCartDesc": "Add some delicious products to get started",
        "continueShopping": "Continue Shopping",
        "subtotal": "Subtotal",
        "delivery": "Delivery",
        "free": "Free",
        "grandTotal": "Grand Total",
        "checkout": "Checkout",
        "customerInfo": "Customer Information",
        "placeOrder": "Place Order",
        "processing": "Processing...",
        "orderSuccess": "Order placed successfully!",
        "orderSuccessDesc": "We will contact you shortly to confirm your order",
        "orderError": "Failed to place order. Please try again.",
        "missingInfo": "Missing Information",
        "missingInfoDesc": "Please fill in all required fields",
        "emptyCartTitle": "Empty Cart",
        "emptyCartToast": "Please add items to your cart first",
        "added": "Added to cart",
    },
    "ka": {
        "title": "სავაჭრო კალათა",
        "emptyCart": "თქვენი კალათა ცარიელია",
        "emptyCartDesc": "დაამატეთ გემრიელი პროდუქტები დასაწყებად",
        "continueShopping": "შოპინგის გაგრძელება",
        "subtotal": "ქვეჯამი",
        "delivery": "მიტანა",
        "free": "უფასო",
        "grandTotal": "საერთო ჯამი",
        "checkout": "შეკვეთა",
        "customerInfo": "მყიდველის ინფორმაცია",
        "placeOrder": "შეკვეთის გაფორმება",
        "processing": "მუშავდება...",
        "orderSuccess": "შეკვეთა წარმატებით გაფორმდა!",
        "orderSuccessDesc": "ჩვენ მალე დაგიკავშირდებით შეკვეთის დასადასტურებლად",
        "orderError": "შეკვეთის გაფორმება ვერ მოხერხდა. გთხოვთ სცადოთ ხელახლა.",
        "missingInfo": "ნაკლული ინფორმაცია",
        "missingInfoDesc": "გთხოვთ შეავსოთ ყველა სავალდებულო ველი",
        "emptyCartTitle": "ცარიელი კალათა",
        "emptyCartToast": "გთხოვთ ჯერ დაამატოთ პროდუქტები კალათაში",
        "added": "დაემატა კალათაში",
    },
}

ABOUT = {
    "en": {
        "title": "About Piwkina.ge",
        "subtitle": "Preserving Georgian culinary traditions since 2020",
        "story": {
            "title": "Our Story",
            "paragraphs": [
                "Piwkina.ge was born from a passion for authentic Georgian cuisine and a desire to share the rich "
                "flavors of traditional roasted pork with families across Tbilisi.",
                "We believe that food is more than just sustenance – it's a connection to our heritage, our "
                "culture, and our community.",
                "Today, we're proud to serve hundreds of families throughout Tbilisi, maintaining the highest "
                "standards of quality and authenticity in every order we deliver.",
            ],
        },
        "values": {
            "title": "Our Values",
            "items": [
                {"title": "Quality First", "description": "We source only the finest ingredients and maintain strict quality standards in every step of our process."},
                {"title": "Traditional Methods", "description": "Our recipes and cooking techniques have been passed down through generations of Georgian families."},
                {"title": "Community Focus", "description": "We're committed to serving our local community and supporting Georgian culinary traditions."},
                {"title": "Fresh Daily", "description": "Every order is prepared fresh daily using traditional Georgian cooking methods and spices."},
            ],
        },
        "mission": {
            "title": "Our Mission",
            "content": "To preserve and share the authentic flavors of Georgian cuisine by delivering the highest "
                       "quality traditional roasted pork directly to families throughout Tbilisi.",
        },
    },
    "ka": {
        "title": "Piwkina.ge-ს შესახებ",
        "subtitle": "2020 წლიდან ვინარჩუნებთ ქართულ კულინარიულ ტრადიციებს",
        "story": {
            "title": "ჩვენი ისტორია",
            "paragraphs": [
                "Piwkina.ge დაიბადა ავთენტური ქართული სამზარეულოს ვნებით და ტრადიციული შემწვარი გოჭის მდიდარი "
                "გემოების თბილისის ოჯახებთან გაზიარების სურვილით.",
                "ჩვენ გვჯერა, რომ საკვები უბრალო საზრდოზე მეტია – ეს არის კავშირი ჩვენს მემკვიდრეობასთან, ჩვენს "
                "კულტურასთან და ჩვენს საზოგადოებასთან.",
                "დღეს ჩვენ ვამაყობთ, რომ ვემსახურებით ასობით ოჯახს მთელ თბილისში.",
            ],
        },
        "values": {
            "title": "ჩვენი ღირებულებები",
            "items": [
                {"title": "ხარისხი პირველ ადგილზე", "description": "ჩვენ ვირჩევთ მხოლოდ საუკეთესო ინგრედიენტებს და ვინარჩუნებთ მკაცრ ხარისხის სტანდარტებს."},
                {"title": "ტრადიციული მეთოდები", "description": "ჩვენი რეცეპტები და მომზადების ტექნიკა ქართული ოჯახების თაობებით არის გადმოცემული."},
                {"title": "საზოგადოებაზე ფოკუსი", "description": "ჩვენ ვართ ერთგულები ჩვენი ადგილობრივი საზოგადოების მომსახურებისადმი."},
                {"title": "ყოველდღე ახალი", "description": "ყოველი შეკვეთა ყოველდღე ახლად მზადდება ტრადიციული ქართული მეთოდებითა და სანელებლებით."},
            ],
        },
        "mission": {
            "title": "ჩვენი მისია",
            "content": "ქართული სამზარეულოს ავთენტური გემოების შენარჩუნება და გაზიარება უმაღლესი ხარისხის "
                       "ტრადიციული შემწვარი გოჭის პირდაპირ თბილისის ოჯახებთან მიტანით.",
        },
    },
}

CONTACT = {
    "en": {
        "title": "Contact Us",
        "subtitle": "Get in touch with us for orders, questions, or feedback",
        "contactInfo": "Contact Information",
        "hours": "Business Hours",
        "hoursText": "Monday - Sunday: 9:00 AM - 10:00 PM",
        "form": {
            "title": "Send us a Message",
            "send": "Send Message",
            "success": "Message sent successfully!",
            "successDesc": "We will get back to you as soon as possible",
            "error": "Failed to send message. Please try again.",
        },
        "info": {"phone": "+995 555 123 456", "email": "info@piwkina.ge", "address": "Tbilisi, Georgia"},
    },
    "ka": {
        "title": "დაგვიკავშირდით",
        "subtitle": "დაგვიკავშირდით შეკვეთებისთვის, კითხვებისთვის ან უკუკავშირისთვის",
        "contactInfo": "საკონტაქტო ინფორმაცია",
        "hours": "სამუშაო საათები",
        "hoursText": "ორშაბათი - კვირა: 9:00 - 22:00",
        "form": {
            "title": "გამოგვიგზავნეთ შეტყობინება",
            "send": "შეტყობინების გაგზავნა",
            "success": "შეტყობინება წარმატებით გაიგზავნა!",
            "successDesc": "ჩვენ მალე დაგიკავშირდებით",
            "error": "შეტყობინების გაგზავნა ვერ მოხერხდა. გთხოვთ სცადოთ ხელახლა.",
        },
        "info": {"phone": "+995 555 123 456", "email": "info@piwkina.ge", "address": "თბილისი, საქართველო"},
    },
}

# Admin screens are English-only
ADMIN_MISSING_INFO = ("Missing Information", "Please fill in all required fields")
