"""End-to-end: raw block text -> rendered indicator -> refresh on change."""
import asyncio

import pytest

from tasktracker.config.settings import GREEN, ORANGE, YELLOW
from tasktracker.controller import RefreshOutcome
from tasktracker.processor import CODE_BLOCK_LANGUAGE, ERROR_CLASS, TaskTrackerProcessor
from tasktracker.panels.indicator import derive_id
from tasktracker.vault.store import VaultStore

BLOCK = """\
path: Projects
fileName: Sprint 1
label: Sprint progress
settings:
  sizeKey: MEDIUM
"""


@pytest.fixture
def processor(store, surface, metrics):
    return TaskTrackerProcessor(store, surface, metrics=metrics)


def _error_text(container):
    assert len(container.children) == 1
    placeholder = container.children[0]
    assert placeholder.classes == [ERROR_CLASS]
    return placeholder.text


def test_block_language():
    assert CODE_BLOCK_LANGUAGE == 'tasktracker'


@pytest.mark.parametrize('source, message', [
    ('fileName: Sprint 1', 'TaskTrackerError: Invalid path'),
    ('path: Projects', 'TaskTrackerError: File name is not provided'),
    ('', 'TaskTrackerError: Invalid path'),
    ('path: Projects\nfileName: Nope', 'TaskTrackerError: File not found'),
    ('path: Archive\nfileName: Sprint 1', 'TaskTrackerError: Folder not found'),
])
def test_failures_render_placeholder(processor, store, container, write_note, source, message):
    write_note('Projects/Sprint 1.md', '- [ ] a')
    result = asyncio.run(processor.process_block(source, container))
    assert not result.ok
    assert _error_text(container) == message
    assert processor.controllers == []
    assert store.subscriber_count() == 0


def test_malformed_yaml_is_config_error(processor, container, metrics):
    result = asyncio.run(processor.process_block('path: [unclosed', container))
    assert not result.ok
    assert _error_text(container).startswith('TaskTrackerError: Invalid configuration')
    assert metrics.sample('tasktracker_builds_total', {'outcome': 'config_error'}) == 1.0
    assert metrics.sample('tasktracker_errors_total', {'code': 'tracker.config.invalid'}) == 1.0


def test_block_renders_and_follows_edits(processor, store, surface, container, write_note):
    write_note('Projects/Sprint 1.md', "# Sprint\n- [ ] a\n- [x] b\n- [ ] c\nnotes\n")

    async def scenario():
        result = await processor.process_block(BLOCK, container)
        write_note('Projects/Other.md', '- [x] unrelated')
        write_note('Projects/Sprint 1.md', "- [x] a\n- [x] b\n- [ ] c\n")
        await store.scan_changes()
        return result

    result = asyncio.run(scenario())
    assert result.ok
    box = container.children[0]
    assert box.id == 'task-tracker-container-Sprint1'
    assert box.style['width'] == '350px'
    assert box.children[0].text == 'Sprint progress'

    bar = surface.get_element_by_id(derive_id('task-tracker-progression-bar', 'Sprint 1'))
    text = surface.get_element_by_id(derive_id('task-tracker-progression-text', 'Sprint 1'))
    assert text.text == '66%'
    assert bar.style['background-color'] == YELLOW
    assert processor.controllers[0].last_outcome is RefreshOutcome.UPDATED


def test_initial_render_colour(processor, surface, container, write_note):
    write_note('Projects/Sprint 1.md', "- [ ] a\n- [x] b\n- [ ] c\n")
    asyncio.run(processor.process_block('path: Projects\nfileName: Sprint 1', container))
    bar = surface.get_element_by_id('task-tracker-progression-bar-Sprint1')
    assert bar.style == {'height': '100%', 'width': '33%', 'background-color': ORANGE}
    assert container.children[0].style['width'] == '250px'


def test_two_blocks_track_their_own_documents(processor, store, surface, write_note):
    write_note('Projects/Alpha.md', '- [ ] a')
    write_note('Projects/Beta.md', '- [ ] b')
    left, right = surface.create_root(), surface.create_root()

    async def scenario():
        await processor.process_block('path: Projects\nfileName: Alpha', left)
        await processor.process_block('path: Projects\nfileName: Beta', right)
        store.prime()
        write_note('Projects/Beta.md', '- [x] b')
        await store.scan_changes()

    asyncio.run(scenario())
    assert store.subscriber_count() == 2
    assert surface.get_element_by_id('task-tracker-progression-text-Alpha').text == '0%'
    assert surface.get_element_by_id('task-tracker-progression-text-Beta').text == '100%'
    assert surface.get_element_by_id('task-tracker-progression-bar-Beta').style['background-color'] == GREEN
    alpha, beta = processor.controllers
    assert alpha.last_outcome is None
    assert beta.last_outcome is RefreshOutcome.UPDATED


def test_unload_drops_subscriptions(processor, store, container, write_note):
    write_note('Projects/Sprint 1.md', '- [ ] a')
    asyncio.run(processor.process_block(BLOCK, container))
    assert store.subscriber_count() == 1
    processor.unload()
    assert store.subscriber_count() == 0
    assert processor.controllers == []


class UnreadableStore(VaultStore):
    async def read(self, file):
        raise OSError('disk gone')


def test_store_errors_render_placeholder(vault_root, surface, container, metrics, write_note):
    write_note('Projects/Plan.md', '- [ ] a')
    store = UnreadableStore(vault_root)
    processor = TaskTrackerProcessor(store, surface, metrics=metrics)

    result = asyncio.run(processor.process_block('path: Projects\nfileName: Plan\n', container))

    assert not result.ok
    assert _error_text(container) == 'TaskTrackerError: OSError: disk gone'
    assert processor.controllers == []
    assert store.subscriber_count() == 0
