from app.modules.news.schemas import NewsArticle

FALLBACK_ARTICLES = [
    NewsArticle(
        id="fallback_1",
        title="Real Estate Market Trends for 2025",
        summary="Discover the latest trends shaping the property market this year",
        image="📈",
        date="2 days ago",
        content="""# Real Estate Market Trends for 2025

The real estate market in 2025 is experiencing unprecedented changes driven by technology, changing lifestyle preferences, and economic factors.

## Key Trends to Watch

### 1. Smart Home Technology Integration
Modern buyers are increasingly looking for properties equipped with smart home features. From automated lighting systems to AI-powered security, these technologies are becoming standard expectations rather than luxury additions.

### 2. Sustainable Living Focus
Environmental consciousness is driving demand for eco-friendly properties. Solar panels, energy-efficient appliances, and sustainable building materials are top priorities for today's buyers.

### 3. Remote Work Spaces
The hybrid work model has created demand for properties with dedicated office spaces. Home offices, co-working areas, and flexible room designs are highly sought after.

*Stay updated with the latest market insights.*"""
    ),
    NewsArticle(
        id="fallback_2",
        title="Top Home Buying Tips for First-Time Buyers",
        summary="Essential advice for making your first property purchase successful",
        image="💡",
        date="1 week ago",
        content="""# Top 10 Home Buying Tips for First-Time Buyers

Buying your first home is an exciting milestone, but it can also feel overwhelming. Here are essential tips to help you navigate the process successfully.

## Before You Start Looking

### 1. Check Your Credit Score
Your credit score significantly impacts your mortgage rates. Aim for a score of 620 or higher for better loan terms.

### 2. Save for Down Payment
While some programs offer low down payment options, having 10-20% saved can provide better rates and terms.

### 3. Get Pre-Approved
Pre-approval gives you a clear budget and shows sellers you're a serious buyer.

*Remember, buying a home is a marathon, not a sprint. Take your time and make informed decisions.*"""
    ),
    NewsArticle(
        id="fallback_3",
        title="Investment Properties: What You Need to Know",
        summary="A comprehensive guide to building wealth through real estate",
        image="💰",
        date="3 days ago",
        content="""# Investment Properties: What You Need to Know

Real estate investment can be a powerful wealth-building strategy when approached with knowledge and preparation.

## Types of Investment Properties

### Rental Properties
Traditional buy-and-hold strategy where you purchase properties to rent out for steady cash flow.

**Pros:**
- Steady monthly income
- Property appreciation over time
- Tax benefits and deductions

**Cons:**
- Property management responsibilities
- Vacancy risks
- Maintenance costs

*Success in real estate investment requires patience, education, and strategic planning.*"""
    ),
]
