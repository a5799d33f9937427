from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import get_settings
from core.exceptions import register_exception_handlers
from app.startup import configure_startup_logging, run_startup_checks

# ========== Record Store ==========
from modules.retail.routers.retail_router import router as retail_router

# ========== Analytics & Insights ==========
from modules.analytics.routers.analytics_router import router as analytics_router
from modules.analytics.routers.ai_insights_router import router as ai_insights_router

settings = get_settings()

configure_startup_logging()

app = FastAPI(
    title=f"{settings.app_name} - Retail Analytics API",
    description="""
    Small-business retail analytics. Log sales and stock purchases, then read
    them back as dashboard KPIs and rule-based insights.

    ## Features

    * **Record Store** - Products, inventory receipts (GRNs) and sales
    * **Dashboard Metrics** - Total sales, cost of sales, gross margin and all-time stock levels
    * **Insights** - Stock alerts, growth and margin observations
    * **Retail Maths** - Pricing, margin and turnover calculators
    """,
    version=settings.app_version,
)

# Register exception handlers for consistent error responses
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Record Store
app.include_router(retail_router)

# Analytics & Insights
app.include_router(analytics_router)
app.include_router(ai_insights_router)


@app.on_event("startup")
async def startup_event():
    """Ensure the schema exists before serving requests"""
    run_startup_checks()


@app.get("/")
def read_root():
    return {"message": f"{settings.app_name} backend is running"}
