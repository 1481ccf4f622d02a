from typing import Any, Dict

DEFAULT_LANGUAGE = 'en_US'

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    'en_US': {
        'admin_title': 'Data Management System',
        'menu_editor': 'Menu Editor',
        'menu_added': 'Menu item added',
        'menu_updated': 'Menu item updated',
        'menu_deleted': 'Menu item deleted',
        'menu_moved': 'Menu "{label}" moved',
        'menu_made_root': 'Menu "{label}" is now a main menu',
        'menu_saved': 'Menu structure saved',
        'menu_reset': 'Menu restored to defaults',
        'settings_saved': 'Settings saved',
        'menu_error': 'Menu operation failed',
        'validation_error': 'ID and label are required',
        'menu_not_found': 'Menu "{id}" does not exist',
        'menu_not_editable': 'Menu "{id}" is a system menu and cannot be deleted',
        'menu_duplicate_id': 'Menu ID "{id}" already exists',
        'menu_cycle': 'Cannot move a parent into its own child',
        'invalid_request': 'Invalid request data',
        'server_error': 'Server error',
        'language_set': 'Language set successfully',
    },
    'id_ID': {
        'admin_title': 'Sistem Manajemen Data',
        'menu_editor': 'Editor Menu',
        'menu_added': 'Menu baru berhasil ditambahkan!',
        'menu_updated': 'Menu berhasil diupdate!',
        'menu_deleted': 'Menu berhasil dihapus!',
        'menu_moved': 'Menu "{label}" dipindahkan',
        'menu_made_root': 'Menu "{label}" dijadikan menu utama',
        'menu_saved': 'Struktur menu berhasil disimpan!',
        'menu_reset': 'Menu dikembalikan ke bawaan',
        'settings_saved': 'Pengaturan berhasil disimpan!',
        'menu_error': 'Operasi menu gagal',
        'validation_error': 'ID dan Label menu harus diisi!',
        'menu_not_found': 'Menu "{id}" tidak ditemukan',
        'menu_not_editable': 'Menu "{id}" adalah menu sistem dan tidak bisa dihapus',
        'menu_duplicate_id': 'ID menu sudah ada!',
        'menu_cycle': 'Tidak bisa memindahkan parent ke dalam child-nya sendiri!',
        'invalid_request': 'Data permintaan tidak valid',
        'server_error': 'Terjadi kesalahan server',
        'language_set': 'Bahasa berhasil diubah',
    },
    'zh_CN': {
        'admin_title': '数据管理系统',
        'menu_editor': '菜单编辑',
        'menu_added': '菜单添加成功',
        'menu_updated': '菜单修改成功',
        'menu_deleted': '菜单删除成功',
        'menu_moved': '菜单"{label}"已移动',
        'menu_made_root': '菜单"{label}"已设为顶级菜单',
        'menu_saved': '菜单结构已保存',
        'menu_reset': '菜单已恢复默认',
        'settings_saved': '设置已保存',
        'menu_error': '菜单操作失败',
        'validation_error': '菜单ID和名称不能为空',
        'menu_not_found': '菜单"{id}"不存在',
        'menu_not_editable': '菜单"{id}"是系统菜单, 不能删除',
        'menu_duplicate_id': '菜单ID"{id}"已存在',
        'menu_cycle': '不能把父菜单移动到自己的子菜单下',
        'invalid_request': '请求数据错误',
        'server_error': '服务器错误',
        'language_set': '语言设置成功',
    },
}


def get_text(key: str, language: str = DEFAULT_LANGUAGE, **params: Any) -> str:
    """获取翻译文本, 未知语言回退到英文, 未知键返回键本身"""
    texts = TRANSLATIONS.get(language, TRANSLATIONS[DEFAULT_LANGUAGE])
    text = texts.get(key) or TRANSLATIONS[DEFAULT_LANGUAGE].get(key, key)
    if params:
        try:
            return text.format(**params)
        except (KeyError, IndexError):
            return text
    return text
