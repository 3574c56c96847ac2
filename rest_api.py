from typing import Optional

from fastapi import APIRouter, Body, Depends, FastAPI, Header, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from account_service import AccountService
from algorithms import Capabilities, legal_fields
from auth import Identity, TokenService
from config import APP_VERSION, load_settings
from db import Database, ExerciseCatalogRepository, UserRepository
from errors import AuthError, AuthorizationError, HeraclesError, ValidationError, field_errors
from migrate import seed_admin, seed_catalog
from models import (
    AdminUserUpdate,
    ExercisePayload,
    ExerciseUpdate,
    LoginPayload,
    ProfileUpdate,
    RegisterPayload,
    TemplateDuplicate,
    TemplateInstantiate,
    TemplatePayload,
    TemplateUpdate,
)
from settings_schema import SettingsSchema
from stats_service import StatisticsService
from template_service import TemplateService
from workout_service import WorkoutService


class HeraclesAPI:
    """Provides REST endpoints for workout logging."""

    def __init__(
        self,
        db_path: Optional[str] = None,
        yaml_path: str = "settings.yaml",
        *,
        settings: Optional[SettingsSchema] = None,
        seed: bool = True,
    ) -> None:
        self.settings = settings or load_settings(yaml_path, db_file=db_path)
        self.db = Database(db_path or self.settings.db_file)
        self.tokens = TokenService(
            self.settings.jwt_secret, self.settings.token_expire_days
        )
        self.users = UserRepository(self.db)
        self.catalog = ExerciseCatalogRepository(self.db)
        self.workout_service = WorkoutService(self.db, catalog=self.catalog)
        self.statistics = StatisticsService(self.db, catalog_repo=self.catalog)
        self.accounts = AccountService(
            self.db, self.tokens, self.users, self.workout_service
        )
        self.templates = TemplateService(self.db, self.workout_service)
        if seed:
            seed_catalog(self.catalog)
            seed_admin(self.accounts, self.settings)
        self.app = FastAPI(
            title="Heracles API",
            description="REST API for workout logging and progression statistics",
            version=APP_VERSION,
        )
        self._install_error_handlers()
        self._setup_routes()

    def _install_error_handlers(self) -> None:
        @self.app.exception_handler(HeraclesError)
        async def heracles_error(request: Request, exc: HeraclesError):
            body: dict = {"error": exc.message}
            if isinstance(exc, ValidationError):
                body["fieldErrors"] = exc.field_errors
            return JSONResponse(body, status_code=exc.status_code)

        @self.app.exception_handler(RequestValidationError)
        async def request_validation_error(request: Request, exc: RequestValidationError):
            logger.info(f"Rejected request body for {request.url.path}")
            return JSONResponse(
                {"error": "Invalid payload", "fieldErrors": field_errors(exc.errors())},
                status_code=400,
            )

    def _current_identity(self, authorization: Optional[str] = Header(None)) -> Identity:
        claims = self.tokens.identity_from_header(authorization)
        row = self.users.fetch_credentials(claims.id)
        if row is None:
            logger.warning(f"Token presented for missing user {claims.id}")
            raise AuthError("Invalid token")
        return Identity(id=row["id"], email=row["email"], role=row["role"])

    def _setup_routes(self) -> None:
        current_identity = self._current_identity

        def admin_identity(identity: Identity = Depends(current_identity)) -> Identity:
            if not identity.is_admin:
                logger.warning(f"User {identity.id} attempted an admin action")
                raise AuthorizationError("Admin only")
            return identity

        auth_router = APIRouter(prefix="/api/auth", tags=["Auth"])
        me_router = APIRouter(prefix="/api/me", tags=["Profile"])
        exercises_router = APIRouter(prefix="/api/exercises", tags=["Exercises"])
        workouts_router = APIRouter(prefix="/api/workouts", tags=["Workouts"])
        admin_router = APIRouter(prefix="/api/admin", tags=["Admin"])
        templates_router = APIRouter(prefix="/api/templates", tags=["Templates"])

        @self.app.get(
            "/",
            summary="Health check",
            description="Report service name and version.",
        )
        def health():
            return {"ok": True, "service": "heracles", "version": APP_VERSION}

        @auth_router.post("/register")
        def register(payload: RegisterPayload):
            return self.accounts.register(payload.email, payload.name, payload.password)

        @auth_router.post("/login")
        def login(payload: LoginPayload):
            return self.accounts.login(payload.email, payload.password)

        @me_router.get("")
        def get_me(identity: Identity = Depends(current_identity)):
            return self.accounts.profile(identity)

        @me_router.put("")
        def update_me(
            payload: ProfileUpdate, identity: Identity = Depends(current_identity)
        ):
            return self.accounts.update_profile(identity, payload)

        @exercises_router.get("")
        def list_exercises(identity: Identity = Depends(current_identity)):
            return self.catalog.fetch_all_exercises()

        @exercises_router.get("/{exercise_id}")
        def get_exercise(exercise_id: int, identity: Identity = Depends(current_identity)):
            exercise = self.catalog.fetch_detail(exercise_id)
            fields = legal_fields(Capabilities.from_row(exercise))
            return {**exercise, "legalFields": [f.value for f in fields]}

        @exercises_router.post("")
        def add_exercise(
            payload: ExercisePayload, identity: Identity = Depends(admin_identity)
        ):
            eid = self.catalog.add(
                payload.name,
                payload.category,
                created_by=identity.id,
                muscle_group=payload.muscleGroup,
                equipment=payload.equipment,
                youtube_url=payload.youtubeUrl,
                has_load=payload.hasLoad,
                has_reps=payload.hasReps,
                has_duration=payload.hasDuration,
                has_intervals=payload.hasIntervals,
            )
            logger.info(f"Exercise {eid} added by user {identity.id}")
            return {"ok": True, "id": eid}

        @exercises_router.put("/{exercise_id}")
        def update_exercise(
            exercise_id: int,
            payload: ExerciseUpdate,
            identity: Identity = Depends(admin_identity),
        ):
            self.catalog.update(exercise_id, payload.model_dump(exclude_none=True))
            return {"ok": True}

        @exercises_router.delete("/{exercise_id}")
        def delete_exercise(exercise_id: int, identity: Identity = Depends(admin_identity)):
            self.catalog.remove(exercise_id)
            logger.info(f"Exercise {exercise_id} deleted by user {identity.id}")
            return {"ok": True}

        @workouts_router.get("")
        def list_workouts(
            start_date: Optional[str] = Query(None, alias="from"),
            end_date: Optional[str] = Query(None, alias="to"),
            summary: bool = False,
            identity: Identity = Depends(current_identity),
        ):
            return self.workout_service.list_workouts(
                identity, start_date, end_date, summary
            )

        @workouts_router.post("")
        def create_workout(
            payload: dict = Body(...), identity: Identity = Depends(current_identity)
        ):
            workout_id = self.workout_service.create(identity, payload)
            return {"ok": True, "workoutId": workout_id}

        @workouts_router.get("/stats")
        def workout_stats(identity: Identity = Depends(current_identity)):
            return self.statistics.daily_totals(identity.id)

        @workouts_router.get("/stats/progression")
        def workout_progression(
            exerciseId: Optional[str] = None,
            identity: Identity = Depends(current_identity),
        ):
            try:
                exercise_id = int(exerciseId or "")
            except ValueError:
                exercise_id = 0
            if exercise_id <= 0:
                raise ValidationError.for_field("exerciseId", "exerciseId required")
            return self.statistics.progression(identity.id, exercise_id)

        @workouts_router.get("/{workout_id}")
        def get_workout(workout_id: int, identity: Identity = Depends(current_identity)):
            return self.workout_service.fetch_tree(workout_id, identity)

        @workouts_router.put("/{workout_id}")
        def replace_workout(
            workout_id: int,
            payload: dict = Body(...),
            identity: Identity = Depends(current_identity),
        ):
            self.workout_service.replace(workout_id, identity, payload)
            return {"ok": True, "workoutId": workout_id}

        @workouts_router.delete("/{workout_id}")
        def delete_workout(workout_id: int, identity: Identity = Depends(current_identity)):
            self.workout_service.delete(workout_id, identity)
            return {"ok": True}

        @admin_router.get("/users")
        def list_users(identity: Identity = Depends(admin_identity)):
            return self.accounts.list_users()

        @admin_router.post("/promote/{user_id}")
        def promote_user(user_id: int, identity: Identity = Depends(admin_identity)):
            return self.accounts.promote(user_id)

        @admin_router.put("/users/{user_id}")
        def update_user(
            user_id: int,
            payload: AdminUserUpdate,
            identity: Identity = Depends(admin_identity),
        ):
            return self.accounts.admin_update(user_id, payload)

        @admin_router.delete("/users/{user_id}")
        def delete_user(user_id: int, identity: Identity = Depends(admin_identity)):
            self.accounts.delete_user(identity, user_id)
            return {"ok": True}

        @templates_router.get("")
        def list_templates(identity: Identity = Depends(current_identity)):
            return self.templates.list_templates(identity)

        @templates_router.post("")
        def create_template(
            payload: TemplatePayload, identity: Identity = Depends(current_identity)
        ):
            tid = self.templates.create(identity, payload.name, payload.notes, payload.items)
            return {"id": tid}

        @templates_router.get("/{template_id}")
        def get_template(template_id: int, identity: Identity = Depends(current_identity)):
            return self.templates.fetch(identity, template_id)

        @templates_router.put("/{template_id}")
        def update_template(
            template_id: int,
            payload: TemplateUpdate,
            identity: Identity = Depends(current_identity),
        ):
            return self.templates.update(identity, template_id, payload)

        @templates_router.delete("/{template_id}")
        def delete_template(template_id: int, identity: Identity = Depends(current_identity)):
            self.templates.delete(identity, template_id)
            return {"ok": True}

        @templates_router.post("/{template_id}/duplicate")
        def duplicate_template(
            template_id: int,
            payload: Optional[TemplateDuplicate] = None,
            identity: Identity = Depends(current_identity),
        ):
            name = payload.name if payload else None
            return {"id": self.templates.duplicate(identity, template_id, name)}

        @templates_router.post("/{template_id}/workouts")
        def instantiate_template(
            template_id: int,
            payload: TemplateInstantiate,
            identity: Identity = Depends(current_identity),
        ):
            workout_id = self.templates.instantiate(
                identity, template_id, payload.date, payload.title, payload.notes
            )
            return {"ok": True, "workoutId": workout_id}

        self.app.include_router(auth_router)
        self.app.include_router(me_router)
        self.app.include_router(exercises_router)
        self.app.include_router(workouts_router)
        self.app.include_router(admin_router)
        self.app.include_router(templates_router)


def create_app() -> FastAPI:
    """Build the application from ``settings.yaml`` and the environment."""
    return HeraclesAPI().app


if __name__ == "__main__":
    import uvicorn

    from log_setup import setup_logger

    settings = load_settings()
    setup_logger(settings.log_level, settings.log_file)
    uvicorn.run(HeraclesAPI(settings=settings).app, port=settings.port)
