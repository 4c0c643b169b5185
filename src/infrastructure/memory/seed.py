"""Demo dataset served when no remote backend is configured."""

from domain.entities.project import Project, ProjectStatus
from domain.entities.review import Review
from domain.entities.site_settings import SiteSettings


def seed_projects() -> list[Project]:
    return [
        Project(
            id="1",
            title="Mumbai Commercial Complex",
            description="A 500kW rooftop solar installation for a major commercial complex.",
            capacity_kw=500,
            address="123 Business Park, Andheri East",
            city="Mumbai",
            state="Maharashtra",
            latitude=19.0760,
            longitude=72.8777,
            images=["https://images.unsplash.com/photo-1509391366360-2e959784a276?w=800"],
            installation_date="2023-06-15",
            status=ProjectStatus.ACTIVE,
            tags=["commercial", "rooftop"],
            created_at="2023-06-15",
            updated_at="2023-06-15",
        ),
        Project(
            id="2",
            title="Bangalore Tech Park",
            description="750kW solar installation powering a major IT park.",
            capacity_kw=750,
            address="Electronic City Phase 1",
            city="Bangalore",
            state="Karnataka",
            latitude=12.9716,
            longitude=77.5946,
            images=["https://images.unsplash.com/photo-1545208942-e0c45d2d07c7?w=800"],
            installation_date="2023-09-20",
            status=ProjectStatus.ACTIVE,
            tags=["commercial", "tech-park"],
            created_at="2023-09-20",
            updated_at="2023-09-20",
        ),
        Project(
            id="3",
            title="Chennai Manufacturing Plant",
            description="Industrial-scale 1MW solar installation.",
            capacity_kw=1000,
            address="SIPCOT Industrial Park",
            city="Chennai",
            state="Tamil Nadu",
            latitude=13.0827,
            longitude=80.2707,
            images=["https://images.unsplash.com/photo-1508514177221-188b1cf16e9d?w=800"],
            installation_date="2023-11-10",
            status=ProjectStatus.ACTIVE,
            tags=["industrial", "ground-mount"],
            created_at="2023-11-10",
            updated_at="2023-11-10",
        ),
    ]


def seed_reviews() -> list[Review]:
    return [
        Review(
            id="1",
            project_id="1",
            reviewer_name="Rajesh Sharma",
            rating=5,
            comment="Excellent work! Our electricity bills reduced by 60%.",
            is_approved=True,
            admin_response="Thank you Rajesh!",
            created_at="2023-08-15",
            updated_at="2023-08-15",
        ),
        Review(
            id="2",
            project_id="2",
            reviewer_name="Priya Venkatesh",
            rating=5,
            comment="Great investment! The monitoring dashboard is fantastic.",
            is_approved=True,
            admin_response=None,
            created_at="2023-11-05",
            updated_at="2023-11-05",
        ),
    ]


def seed_settings() -> SiteSettings:
    return SiteSettings(
        org_name="Solar Systems India",
        contact_email="info@solarsystems.in",
        contact_phone="+91 1800 123 4567",
        org_address="Solar Tower, 101 Green Energy Road, Mumbai, Maharashtra 400001",
        kwh_per_kw_per_month=130,
        tariff_per_kwh=8.5,
        system_cost_per_kw=45000,
        subsidy_percentage=30,
        maintenance_cost_per_kw_year=500,
        carousel_speed=30,
        map_center_lat=21.0,
        map_center_lng=78.0,
        map_zoom=5,
        updated_at="2024-01-01",
    )
