"""Tests for the user directory and credential handling."""

import pytest

from rehab_tracker.errors import Conflict, Forbidden, NotFound, Unauthenticated, ValidationFailed
from rehab_tracker.services.auth_service import AuthService
from rehab_tracker.services.user_service import UserService


class TestDirectory:
    def test_trainers_list_athletes(self, db, trainer, athlete, other_athlete):
        athletes = UserService(db).list_athletes(trainer)
        assert {u.id for u in athletes} == {athlete.id, other_athlete.id}

    def test_athletes_cannot_list_athletes(self, db, athlete):
        with pytest.raises(Forbidden):
            UserService(db).list_athletes(athlete)

    def test_list_trainers(self, db, trainer, other_trainer, athlete):
        assert {u.id for u in UserService(db).list_trainers()} == {trainer.id, other_trainer.id}

    def test_get_user_scope(self, db, trainer, athlete, other_athlete):
        service = UserService(db)
        assert service.get_user(trainer, athlete.id).email == "athlete@example.com"
        assert service.get_user(athlete, athlete.id).id == athlete.id
        with pytest.raises(Forbidden):
            service.get_user(other_athlete, athlete.id)
        with pytest.raises(NotFound):
            service.get_user(trainer, 999)

    def test_update_own_profile(self, db, athlete):
        user = UserService(db).update_profile(athlete, athlete.id, {"sport": "Soccer", "position": "Keeper"})
        assert (user.sport, user.position) == ("Soccer", "Keeper")

    def test_update_other_profile_forbidden(self, db, trainer, athlete):
        with pytest.raises(Forbidden):
            UserService(db).update_profile(trainer, athlete.id, {"sport": "Soccer"})

    def test_update_rejects_role_change(self, db, athlete):
        with pytest.raises(ValidationFailed):
            UserService(db).update_profile(athlete, athlete.id, {"role": "trainer"})


class TestAuth:
    def test_register_and_authenticate(self, db):
        service = AuthService(db)
        user = service.register(
            email="new@example.com",
            password="secret123",
            first_name="New",
            last_name="Athlete",
            role="athlete",
        )

        assert user.hashed_password != "secret123"
        assert service.authenticate("new@example.com", "secret123").id == user.id

    def test_duplicate_email(self, db, athlete):
        with pytest.raises(Conflict):
            AuthService(db).register(
                email=athlete.email, password="x12345", first_name="A", last_name="B", role="athlete"
            )

    def test_invalid_role(self, db):
        with pytest.raises(ValidationFailed):
            AuthService(db).register(
                email="admin@example.com", password="x12345", first_name="A", last_name="B", role="admin"
            )

    def test_wrong_password(self, db):
        service = AuthService(db)
        service.register(
            email="new@example.com", password="secret123", first_name="N", last_name="A", role="trainer"
        )
        with pytest.raises(Unauthenticated):
            service.authenticate("new@example.com", "wrong")
        with pytest.raises(Unauthenticated):
            service.authenticate("nobody@example.com", "secret123")

    def test_token_round_trip(self, db, trainer):
        token = AuthService.create_access_token(trainer)
        assert AuthService(db).user_from_token(token).id == trainer.id

    @pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
    def test_bad_tokens(self, db, token):
        with pytest.raises(Unauthenticated):
            AuthService(db).user_from_token(token)
