from tasktracker.config.settings import DEFAULT_SETTINGS, TrackerSettings
from tasktracker.panels.helpers import ProgressResult
from tasktracker.panels.indicator import (
    CONTAINER_BASE_ID,
    PROGRESSION_BAR_BASE_ID,
    PROGRESSION_TEXT_BASE_ID,
    IndicatorState,
    UpdateStatus,
    derive_id,
)


def test_derive_id_strips_spaces_and_is_stable():
    assert derive_id('base', 'My Sprint  Notes') == 'base-MySprintNotes'
    assert derive_id('base', 'My Sprint  Notes') == derive_id('base', 'My Sprint  Notes')
    assert derive_id(PROGRESSION_BAR_BASE_ID, 'Sprint 1') == 'task-tracker-progression-bar-Sprint1'


def test_render_builds_element_tree(surface, container):
    state = IndicatorState(surface)
    handle = state.render(container, TrackerSettings(size_key='MEDIUM', colors=('#a',)),
                          ProgressResult(40, '#a'), 'Sprint 1', label='Sprint')

    assert handle.id == 'task-tracker-container-Sprint1'
    assert handle.width == '350px'
    box = surface.get_element_by_id(handle.id)
    assert box is not None and box.style['width'] == '350px'
    assert box.classes == ['task-tracker-container']
    assert box.children[0].text == 'Sprint'

    bar = surface.get_element_by_id(handle.bar_id)
    assert bar.style == {'height': '100%', 'width': '40%', 'background-color': '#a'}
    assert bar.parent.classes == ['task-tracker-progress-bar']
    text = surface.get_element_by_id(handle.text_id)
    assert text.tag == 'p' and text.text == '40%'
    assert text.style['color'] == '#a'
    assert state.get('Sprint 1') is handle


def test_update_in_place(surface, container):
    state = IndicatorState(surface)
    state.render(container, DEFAULT_SETTINGS, ProgressResult(10, 'red'), 'Plan')

    status = state.update('Plan', ProgressResult(75, 'yellow'))

    assert status is UpdateStatus.UPDATED
    bar = surface.get_element_by_id(derive_id(PROGRESSION_BAR_BASE_ID, 'Plan'))
    text = surface.get_element_by_id(derive_id(PROGRESSION_TEXT_BASE_ID, 'Plan'))
    assert bar.style['width'] == '75%'
    assert bar.style['background-color'] == 'yellow'
    assert text.text == '75%'
    handle = state.get('Plan')
    assert (handle.percentage, handle.color) == (75, 'yellow')
    assert handle.to_panel() == {
        'id': 'task-tracker-container-Plan',
        'document': 'Plan',
        'percentage': 75,
        'color': 'yellow',
        'label': None,
        'width': '250px',
    }


def test_update_unknown_document_is_not_found(surface):
    state = IndicatorState(surface)
    assert state.update('Nothing here', ProgressResult(0, 'x')) is UpdateStatus.NOT_FOUND


def test_update_after_host_removed_surface(surface, container):
    state = IndicatorState(surface)
    state.render(container, DEFAULT_SETTINGS, ProgressResult(10, 'red'), 'Plan')
    assert surface.remove(derive_id(CONTAINER_BASE_ID, 'Plan'))

    assert state.update('Plan', ProgressResult(90, 'green')) is UpdateStatus.NOT_FOUND
    assert state.get('Plan') is None
    assert container.children == []


def test_rerender_after_recreation_is_found_again(surface):
    state = IndicatorState(surface)
    state.render(surface.create_root(), DEFAULT_SETTINGS, ProgressResult(10, 'red'), 'Plan')
    surface.clear()
    state.render(surface.create_root(), DEFAULT_SETTINGS, ProgressResult(20, 'red'), 'Plan')
    assert state.update('Plan', ProgressResult(30, 'red')) is UpdateStatus.UPDATED
