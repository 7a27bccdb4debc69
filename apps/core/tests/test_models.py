import pytest
from apps.core.models import StaleObjectError
from apps.rcs.models import ResponsibilityCentre


# =============================================================================
# VersionedModel Tests
# =============================================================================

@pytest.mark.django_db
class TestVersionedModel:
    """Tests for the optimistic-locking save of VersionedModel."""

    def test_insert_starts_at_zero(self, core_rc):
        """New rows start at version 0."""
        assert core_rc.version == 0

    def test_save_bumps_version(self, core_rc):
        """Each save of an existing row increments the version."""
        core_rc.description = 'Buildings'
        core_rc.save()
        core_rc.save()

        core_rc.refresh_from_db()
        assert core_rc.version == 2
        assert core_rc.description == 'Buildings'

    def test_stale_copy_rejected(self, core_rc):
        """The second of two copies loaded at the same version cannot save."""
        first = ResponsibilityCentre.objects.get(pk=core_rc.pk)
        second = ResponsibilityCentre.objects.get(pk=core_rc.pk)

        first.description = 'From first'
        first.save()

        second.description = 'From second'
        with pytest.raises(StaleObjectError) as exc_info:
            second.save()

        assert exc_info.value.status_code == 409
        core_rc.refresh_from_db()
        assert core_rc.description == 'From first'
        assert core_rc.version == 1

    def test_update_fields_include_version(self, core_rc):
        """Partial saves still write the new version."""
        core_rc.description = 'Partial'
        core_rc.save(update_fields=['description'])

        stored = ResponsibilityCentre.objects.get(pk=core_rc.pk)
        assert stored.version == 1
        assert stored.description == 'Partial'

    def test_check_version(self, core_rc):
        """A missing client version skips the check; a different one conflicts."""
        core_rc.check_version(None)
        core_rc.check_version(0)

        with pytest.raises(StaleObjectError):
            core_rc.check_version(3)
