from django.contrib import admin

from catalog.models import Location, Show, ShowType, Theatre, TheatreType


class TheatreInline(admin.TabularInline):
    model = Theatre
    fk_name = "location"
    fields = ["name", "theatre_type", "capacity", "is_active"]
    extra = 0


class ShowInline(admin.TabularInline):
    model = Show
    fields = ["title", "show_type", "start_date", "end_date", "is_active"]
    extra = 0


@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    list_display = ["name", "city", "country", "latitude", "longitude", "is_active", "deleted_at"]
    list_filter = ["country", "is_active"]
    search_fields = ["name", "city", "country"]
    inlines = [TheatreInline]


@admin.register(TheatreType, ShowType)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["name", "is_active", "deleted_at"]
    search_fields = ["name"]


@admin.register(Theatre)
class TheatreAdmin(admin.ModelAdmin):
    list_display = ["name", "location", "theatre_type", "capacity", "is_featured", "is_active"]
    list_filter = ["theatre_type", "is_featured", "is_active"]
    search_fields = ["name", "description", "address"]
    inlines = [ShowInline]


@admin.register(Show)
class ShowAdmin(admin.ModelAdmin):
    list_display = ["title", "theatre", "show_type", "start_date", "end_date", "price"]
    list_filter = ["show_type", "is_featured", "is_active"]
    search_fields = ["title", "director", "cast"]
